"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
handing out the Catalog's own Product objects.
"""

from __future__ import annotations

from dataclasses import dataclass

from vending.domain.model.coin import Coin
from vending.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: str
    name: str
    icon: str
    price: str  # formatted, e.g. "€1.50"
    price_cents: int
    stock: int
    max_stock: int

    @property
    def out_of_stock(self) -> bool:
        return self.stock == 0

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            icon=product.icon,
            price=str(product.price),
            price_cents=product.price.amount,
            stock=product.stock,
            max_stock=product.max_stock,
        )


@dataclass(frozen=True)
class PurchaseResult:
    """Output: what the machine dispensed and paid back."""

    product: ProductDTO
    paid: str
    change: str
    change_cents: int
    coins: tuple[Coin, ...]


@dataclass(frozen=True)
class RefundResult:
    """Output: coins returned by a refund."""

    amount: str
    amount_cents: int
    coins: tuple[Coin, ...]
