"""Application service: List Products use case (query)."""

from __future__ import annotations

from vending.application.dto import ProductDTO
from vending.domain.model.catalog import Catalog


class ListProductsHandler:

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def handle(self) -> list[ProductDTO]:
        return [ProductDTO.from_product(p) for p in self._catalog.list()]
