"""Catalog aggregate: the ordered set of products the machine sells.

The Catalog owns every Product. All mutations go through it so the
stock and price invariants are checked in exactly one place.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace

from vending.domain.exceptions import EntityNotFoundError, ValidationError
from vending.domain.model.coin import DenominationSet
from vending.domain.model.product import DEFAULT_ICON, Product, ProductDraft
from vending.domain.model.value_objects import Money

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "price", "stock", "max_stock", "icon"})
_MAX_ID_ATTEMPTS = 100


def random_product_id() -> str:
    return uuid.uuid4().hex


class Catalog:
    """Aggregate root for the product catalog.

    Products are kept in insertion order for display. Ids come from
    ``id_factory`` (random UUIDs by default) and are never handed out
    twice by the same catalog, even after the product is deleted.
    """

    def __init__(
        self,
        denominations: DenominationSet,
        products: Iterable[Product] = (),
        id_factory: Callable[[], str] = random_product_id,
    ) -> None:
        self._denominations = denominations
        self._id_factory = id_factory
        self._products: dict[str, Product] = {}
        self._issued_ids: set[str] = set()

        for product in products:
            if product.id in self._products:
                raise ValidationError(f"Duplicate product ID '{product.id}'")
            product.to_draft().validate(denominations)
            self._products[product.id] = product
            self._issued_ids.add(product.id)

    @property
    def denominations(self) -> DenominationSet:
        return self._denominations

    # --- Queries --------------------------------------------------------------

    def get(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    def require(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def list(self) -> list[Product]:
        """All products in insertion order."""
        return list(self._products.values())

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    # --- Commands -------------------------------------------------------------

    def create(
        self,
        name: str,
        price: Money,
        initial_stock: int,
        max_stock: int,
        icon: str = DEFAULT_ICON,
    ) -> Product:
        """Add a new product and return it."""
        draft = ProductDraft(
            name=name,
            price=price,
            stock=initial_stock,
            max_stock=max_stock,
            icon=icon or DEFAULT_ICON,
        )
        return self.add(draft)

    def add(self, draft: ProductDraft) -> Product:
        """Commit a validated draft under a fresh id."""
        draft.validate(self._denominations)
        product = Product(
            id=self._next_id(),
            name=draft.name.strip(),
            price=draft.price,
            stock=draft.stock,
            max_stock=draft.max_stock,
            icon=draft.icon,
        )
        self._products[product.id] = product
        logger.debug("Created product %s (%s)", product.id, product.name)
        return product

    def update(self, product_id: str, **fields: object) -> Product:
        """Partially update a product.

        The merged result is validated before anything changes, so a
        rejected update leaves the product exactly as it was.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )

        product = self.require(product_id)
        draft = replace(product.to_draft(), **fields)
        draft.validate(self._denominations)
        product.apply(draft)
        logger.debug("Updated product %s: %s", product_id, sorted(fields))
        return product

    def delete(self, product_id: str) -> Product:
        product = self.require(product_id)
        del self._products[product_id]
        logger.debug("Deleted product %s (%s)", product_id, product.name)
        return product

    def adjust_stock(self, product_id: str, delta: int) -> Product:
        """Change stock by *delta*; used by both restocking and sales."""
        product = self.require(product_id)
        product.adjust_stock(delta)
        logger.debug(
            "Stock of %s changed by %+d to %d/%d",
            product_id, delta, product.stock, product.max_stock,
        )
        return product

    # --- Internal helpers -----------------------------------------------------

    def _next_id(self) -> str:
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate
        raise ValidationError("Could not generate a unique product ID")
