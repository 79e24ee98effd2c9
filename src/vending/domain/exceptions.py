"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
None of them are fatal: the machine keeps running after any of them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vending.domain.model.value_objects import Money


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class NoSelectionError(EntityNotFoundError):
    """A purchase was attempted without a product selected."""


# --- Money and coins ---------------------------------------------------------


class InvalidAmountError(ValidationError):
    """A money amount is negative, fractional or otherwise malformed."""


class UnderflowError(ValidationError):
    """A subtraction would leave a negative money amount."""


class UnsupportedDenominationError(ValidationError):
    """A coin that the machine does not accept was inserted."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unsupported coin: {value}")


class InvalidDenominationSetError(ValidationError):
    """The configured coins do not form a canonical coin system."""


# --- Catalog -----------------------------------------------------------------


class InvalidPriceError(ValidationError):
    """Price is zero or cannot be paid exactly with the accepted coins."""


class InvalidStockError(ValidationError):
    """Initial stock or capacity violates 0 <= stock <= max_stock."""


class StockOutOfRangeError(ValidationError):
    """A stock adjustment would leave the range [0, max_stock]."""


# --- Transactions ------------------------------------------------------------


class OutOfStockError(DomainException):
    """The product exists but has no units left."""


class InsufficientFundsError(DomainException):
    """The balance does not cover the selected product's price."""

    def __init__(self, shortfall: Money) -> None:
        self.shortfall = shortfall
        super().__init__(f"Insert {shortfall} more")


class NoBalanceError(DomainException):
    """Informational: a refund was requested with nothing inserted."""

    def __init__(self) -> None:
        super().__init__("No change to return")


# --- Infrastructure ----------------------------------------------------------


class PersistenceError(Exception):
    """The catalog store could not be read or written.

    Not a DomainException: the application layer logs these and carries
    on with the in-memory catalog.
    """
