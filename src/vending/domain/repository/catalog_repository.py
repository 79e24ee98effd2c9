"""Abstract persistence adapter for the Catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, in-memory)
live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vending.domain.model.product import Product


class CatalogRepository(ABC):

    @abstractmethod
    def load(self) -> list[Product] | None:
        """Return the stored products in display order, or None if nothing is stored.

        Raises PersistenceError if stored data exists but cannot be read.
        """

    @abstractmethod
    def save(self, products: list[Product]) -> None:
        """Replace the stored catalog. Raises PersistenceError on failure."""

    @abstractmethod
    def clear(self) -> None:
        """Forget the stored catalog so the next load returns None."""
