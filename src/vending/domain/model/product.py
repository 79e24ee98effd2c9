"""Product aggregate and the draft used to stage admin edits.

Products live in the Catalog and nowhere else. Admin create/edit forms
build a ProductDraft first; the draft is validated against the same
invariants the Catalog enforces before anything is committed.
"""

from __future__ import annotations

from dataclasses import dataclass

from vending.domain.exceptions import (
    InvalidPriceError,
    InvalidStockError,
    StockOutOfRangeError,
    ValidationError,
)
from vending.domain.model.coin import DenominationSet
from vending.domain.model.value_objects import Money

DEFAULT_ICON = "📦"
DEFAULT_MAX_STOCK = 15


@dataclass(frozen=True)
class ProductDraft:
    """Typed staging area for a product that is not (yet) in the catalog."""

    name: str
    price: Money
    stock: int
    max_stock: int = DEFAULT_MAX_STOCK
    icon: str = DEFAULT_ICON

    def validate(self, denominations: DenominationSet) -> None:
        """Raise if the draft would break a catalog invariant."""
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(self.icon, str):
            raise ValidationError(f"Product icon must be text, got {self.icon!r}")

        if not isinstance(self.price, Money):
            raise InvalidPriceError(f"Price must be Money, got {type(self.price).__name__}")
        if self.price.is_zero:
            raise InvalidPriceError("Product price must be greater than zero")
        if not denominations.can_represent(self.price):
            raise InvalidPriceError(
                f"Price {self.price} cannot be paid exactly with the accepted "
                f"coins (must be a multiple of {denominations.smallest})"
            )

        for field_name in ("stock", "max_stock"):
            value = getattr(self, field_name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidStockError(f"{field_name} must be an integer, got {value!r}")
        if self.max_stock < 0:
            raise InvalidStockError("Maximum stock cannot be negative")
        if self.stock < 0:
            raise InvalidStockError("Stock cannot be negative")
        if self.stock > self.max_stock:
            raise InvalidStockError(
                f"Stock {self.stock} exceeds maximum capacity {self.max_stock}"
            )


@dataclass
class Product:
    """A product slot in the machine.

    Invariants:
    - ``price`` is positive and payable with the accepted coins
    - ``0 <= stock <= max_stock``

    ``id`` never changes once assigned. The Catalog is the only caller of
    the mutators below; it validates edits through ProductDraft first.
    """

    id: str
    name: str
    price: Money
    stock: int
    max_stock: int
    icon: str = DEFAULT_ICON

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock == 0

    def to_draft(self) -> ProductDraft:
        return ProductDraft(
            name=self.name,
            price=self.price,
            stock=self.stock,
            max_stock=self.max_stock,
            icon=self.icon,
        )

    def apply(self, draft: ProductDraft) -> None:
        """Copy a validated draft onto this product, keeping its id."""
        self.name = draft.name.strip()
        self.price = draft.price
        self.stock = draft.stock
        self.max_stock = draft.max_stock
        self.icon = draft.icon

    def adjust_stock(self, delta: int) -> None:
        """Add *delta* units (negative to remove). Stock is unchanged on failure."""
        if not isinstance(delta, int) or isinstance(delta, bool):
            raise ValidationError(f"Stock delta must be an integer, got {delta!r}")
        new_stock = self.stock + delta
        if new_stock < 0 or new_stock > self.max_stock:
            raise StockOutOfRangeError(
                f"Cannot change stock of {self.name} by {delta:+d}: "
                f"result {new_stock} is outside [0, {self.max_stock}]"
            )
        self.stock = new_stock
