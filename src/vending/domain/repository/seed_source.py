"""Abstract source of the initial catalog used when nothing is stored."""

from __future__ import annotations

from abc import ABC, abstractmethod

from vending.domain.model.product import Product


class SeedSource(ABC):

    @abstractmethod
    def fetch(self) -> list[Product]:
        """Return a fresh list of default products."""
