"""Events the transaction engine publishes to the presentation layer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from vending.domain.model.coin import Coin
from vending.domain.model.value_objects import Money


class EventKind(Enum):
    COIN_INSERTED = "COIN_INSERTED"
    PRODUCT_SELECTED = "PRODUCT_SELECTED"
    PRODUCT_DISPENSED = "PRODUCT_DISPENSED"
    COINS_RETURNED = "COINS_RETURNED"
    TRANSACTION_FAILED = "TRANSACTION_FAILED"


@dataclass(frozen=True)
class EngineEvent:
    kind: EventKind
    message: str
    balance: Money
    product_id: str | None = None
    coins: tuple[Coin, ...] = ()


EventListener = Callable[[EngineEvent], None]
