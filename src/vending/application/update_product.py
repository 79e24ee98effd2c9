"""Application service: Update Product use case."""

from __future__ import annotations

from vending.application.dto import ProductDTO
from vending.application.save_catalog import save_catalog
from vending.domain.exceptions import ValidationError
from vending.domain.model.catalog import Catalog
from vending.domain.model.value_objects import Money
from vending.domain.repository.catalog_repository import CatalogRepository


class UpdateProductHandler:

    def __init__(self, catalog: Catalog, catalog_repo: CatalogRepository) -> None:
        self._catalog = catalog
        self._catalog_repo = catalog_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        price: str | None = None,
        stock: int | None = None,
        max_stock: int | None = None,
        icon: str | None = None,
    ) -> ProductDTO:
        """Update only the fields that were given.

        A session that already selected this product sees the new price
        when it next purchases.
        """
        fields: dict[str, object] = {}
        if name is not None:
            fields["name"] = name
        if price is not None:
            fields["price"] = Money.of(price)
        if stock is not None:
            fields["stock"] = stock
        if max_stock is not None:
            fields["max_stock"] = max_stock
        if icon is not None:
            fields["icon"] = icon

        if not fields:
            raise ValidationError("Nothing to update")

        product = self._catalog.update(product_id, **fields)
        save_catalog(self._catalog, self._catalog_repo)
        return ProductDTO.from_product(product)
