"""Per-customer session state: inserted money and the current selection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from vending.domain.model.value_objects import ZERO, Money

WELCOME_MESSAGE = "Welcome! Insert coins"


class EngineState(Enum):
    IDLE = "IDLE"
    SELECTED = "SELECTED"
    DISPENSING = "DISPENSING"
    REFUNDING = "REFUNDING"


@dataclass
class Session:
    """Mutable state of one customer interaction. Never persisted.

    ``selected_id`` is only a reference into the Catalog; the product may
    have been deleted or sold out since it was selected, so readers must
    look it up again before trusting it.
    """

    balance: Money = ZERO
    selected_id: str | None = None
    message: str = WELCOME_MESSAGE
    state: EngineState = EngineState.IDLE

    def clear_selection(self) -> None:
        self.selected_id = None
        self.state = EngineState.IDLE
