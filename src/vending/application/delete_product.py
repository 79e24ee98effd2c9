"""Application service: Delete Product use case.

Sessions that selected the product are not notified; the transaction
engine notices the dangling selection on its next select or purchase.
"""

from __future__ import annotations

from vending.application.dto import ProductDTO
from vending.application.save_catalog import save_catalog
from vending.domain.model.catalog import Catalog
from vending.domain.repository.catalog_repository import CatalogRepository


class DeleteProductHandler:

    def __init__(self, catalog: Catalog, catalog_repo: CatalogRepository) -> None:
        self._catalog = catalog
        self._catalog_repo = catalog_repo

    def handle(self, product_id: str) -> ProductDTO:
        product = self._catalog.delete(product_id)
        save_catalog(self._catalog, self._catalog_repo)
        return ProductDTO.from_product(product)
