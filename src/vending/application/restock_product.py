"""Application service: Restock Product use case (admin +/- buttons)."""

from __future__ import annotations

from vending.application.dto import ProductDTO
from vending.application.save_catalog import save_catalog
from vending.domain.model.catalog import Catalog
from vending.domain.repository.catalog_repository import CatalogRepository


class RestockProductHandler:

    def __init__(self, catalog: Catalog, catalog_repo: CatalogRepository) -> None:
        self._catalog = catalog
        self._catalog_repo = catalog_repo

    def handle(self, product_id: str, delta: int) -> ProductDTO:
        """Add (or with a negative *delta*, remove) units of a product."""
        product = self._catalog.adjust_stock(product_id, delta)
        save_catalog(self._catalog, self._catalog_repo)
        return ProductDTO.from_product(product)
