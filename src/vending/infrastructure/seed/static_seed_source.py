"""Built-in default products, used the first time the machine starts."""

from __future__ import annotations

from vending.domain.model.product import Product
from vending.domain.model.value_objects import Money
from vending.domain.repository.seed_source import SeedSource

# (id, name, price in cents, stock, icon)
_DEFAULT_PRODUCTS = [
    ("1", "Cola", 150, 12, "🥤"),
    ("2", "Chips", 125, 10, "🍿"),
    ("3", "Candy Bar", 100, 15, "🍫"),
    ("4", "Water", 100, 8, "💧"),
    ("5", "Energy Drink", 250, 7, "⚡"),
    ("6", "Crackers", 175, 9, "🧈"),
    ("7", "Cookies", 150, 11, "🍪"),
    ("8", "Juice", 200, 6, "🧃"),
    ("9", "Nuts", 225, 5, "🥜"),
]


class StaticSeedSource(SeedSource):

    def __init__(self, max_stock: int = 15) -> None:
        self._max_stock = max_stock

    def fetch(self) -> list[Product]:
        return [
            Product(
                id=product_id,
                name=name,
                price=Money(price),
                stock=min(stock, self._max_stock),
                max_stock=self._max_stock,
                icon=icon,
            )
            for product_id, name, price, stock, icon in _DEFAULT_PRODUCTS
        ]
