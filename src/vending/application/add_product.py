"""Application service: Add Product use case."""

from __future__ import annotations

from vending.application.dto import ProductDTO
from vending.application.save_catalog import save_catalog
from vending.domain.model.catalog import Catalog
from vending.domain.model.product import DEFAULT_ICON, DEFAULT_MAX_STOCK, ProductDraft
from vending.domain.model.value_objects import Money
from vending.domain.repository.catalog_repository import CatalogRepository


class AddProductHandler:

    def __init__(self, catalog: Catalog, catalog_repo: CatalogRepository) -> None:
        self._catalog = catalog
        self._catalog_repo = catalog_repo

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        max_stock: int = DEFAULT_MAX_STOCK,
        icon: str = DEFAULT_ICON,
    ) -> ProductDTO:
        """Add a new product to the catalog.

        *price* is in major units as typed by the admin, e.g. ``"1.50"``.
        """
        draft = ProductDraft(
            name=name,
            price=Money.of(price),
            stock=stock,
            max_stock=max_stock,
            icon=icon or DEFAULT_ICON,
        )
        product = self._catalog.add(draft)
        save_catalog(self._catalog, self._catalog_repo)
        return ProductDTO.from_product(product)
