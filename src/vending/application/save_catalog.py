"""Best-effort write-through of the catalog after each mutation."""

from __future__ import annotations

import logging

from vending.domain.exceptions import PersistenceError
from vending.domain.model.catalog import Catalog
from vending.domain.repository.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


def save_catalog(catalog: Catalog, catalog_repo: CatalogRepository) -> bool:
    """Persist the catalog, returning False instead of raising on failure.

    The in-memory catalog stays the source of truth for this session. A
    failed write is not retried; the next mutation simply saves again.
    """
    try:
        catalog_repo.save(catalog.list())
    except PersistenceError as exc:
        logger.warning("Could not save catalog (%d products): %s", len(catalog), exc)
        return False
    return True
