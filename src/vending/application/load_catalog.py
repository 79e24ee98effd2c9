"""Application service: Load Catalog use case.

Runs once at startup. Uses the stored catalog when there is one and
falls back to the seed source otherwise, saving the seed so the next
start finds it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from vending.application.save_catalog import save_catalog
from vending.domain.exceptions import PersistenceError, ValidationError
from vending.domain.model.catalog import Catalog, random_product_id
from vending.domain.model.coin import DenominationSet
from vending.domain.repository.catalog_repository import CatalogRepository
from vending.domain.repository.seed_source import SeedSource

logger = logging.getLogger(__name__)


class LoadCatalogHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        seed_source: SeedSource,
        denominations: DenominationSet,
        id_factory: Callable[[], str] = random_product_id,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._seed_source = seed_source
        self._denominations = denominations
        self._id_factory = id_factory

    def handle(self) -> Catalog:
        try:
            stored = self._catalog_repo.load()
        except PersistenceError as exc:
            logger.warning("Stored catalog is unreadable, using seed data: %s", exc)
            stored = None

        if stored is not None:
            try:
                catalog = Catalog(self._denominations, stored, self._id_factory)
            except ValidationError as exc:
                logger.warning("Stored catalog is invalid, using seed data: %s", exc)
            else:
                logger.info("Loaded %d products from storage", len(catalog))
                return catalog

        catalog = Catalog(
            self._denominations, self._seed_source.fetch(), self._id_factory
        )
        logger.info("Seeded catalog with %d products", len(catalog))
        save_catalog(catalog, self._catalog_repo)
        return catalog
