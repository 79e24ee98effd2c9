"""JSON-file-backed implementation of CatalogRepository.

Each product is stored as::

    {"id": "...", "name": "...", "price": 150, "quantity": 12,
     "icon": "🥤", "maxQuantity": 15}

``price`` is in cents. There is no version field: a format change is
not backward compatible.
"""

from __future__ import annotations

import json
from pathlib import Path

from vending.domain.exceptions import DomainException, PersistenceError
from vending.domain.model.product import DEFAULT_ICON, Product
from vending.domain.model.value_objects import Money
from vending.domain.repository.catalog_repository import CatalogRepository


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    @property
    def file_path(self) -> Path:
        return self._file_path

    # --- CatalogRepository interface ------------------------------------------

    def load(self) -> list[Product] | None:
        if not self._file_path.exists():
            return None
        raw = self._load_raw()
        if not isinstance(raw, list):
            raise PersistenceError(
                f"{self._file_path}: expected a list of products, "
                f"got {type(raw).__name__}"
            )
        try:
            return [self._to_domain(item) for item in raw]
        except (KeyError, TypeError, ValueError, DomainException) as exc:
            raise PersistenceError(
                f"{self._file_path}: malformed product record: {exc}"
            ) from exc

    def save(self, products: list[Product]) -> None:
        self._persist_raw([self._to_raw(p) for p in products])

    def clear(self) -> None:
        try:
            self._file_path.unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Cannot remove {self._file_path}: {exc}") from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": product.price.amount,
            "quantity": product.stock,
            "icon": product.icon,
            "maxQuantity": product.max_stock,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=str(raw["id"]),
            name=raw["name"],
            price=Money(raw["price"]),
            stock=raw["quantity"],
            max_stock=raw["maxQuantity"],
            icon=raw.get("icon", DEFAULT_ICON),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> object:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc

    def _persist_raw(self, records: list[dict]) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps(records, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc
