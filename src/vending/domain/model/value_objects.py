"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, DecimalException

from vending.domain.exceptions import InvalidAmountError, UnderflowError

CURRENCY_SYMBOL = "€"
MINOR_UNITS_PER_MAJOR = 100


@dataclass(frozen=True, order=True)
class Money:
    """Monetary amount as an integer count of minor units (cents).

    Floats are never accepted: summing 0.10 + 0.20 coin values in binary
    floating point drifts, integer cents do not.
    """

    amount: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True cents is always a bug
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise InvalidAmountError(
                f"Money amount must be an integer number of cents, "
                f"got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise InvalidAmountError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __sub__(self, other: Money) -> Money:
        result = self.amount - other.amount
        if result < 0:
            raise UnderflowError(
                f"Cannot subtract {other} from {self}: result would be negative"
            )
        return Money(result)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        major, minor = divmod(self.amount, MINOR_UNITS_PER_MAJOR)
        return f"{CURRENCY_SYMBOL}{major}.{minor:02d}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Parse a major-unit amount ("1.50" -> 150 cents) without rounding."""
        try:
            minor = Decimal(str(amount).strip()) * MINOR_UNITS_PER_MAJOR
        except (DecimalException, ValueError) as exc:
            raise InvalidAmountError(f"Invalid money amount: {amount!r}") from exc
        if not minor.is_finite() or minor != minor.to_integral_value():
            raise InvalidAmountError(
                f"Invalid money amount: {amount!r} (finer than one cent)"
            )
        return Money(int(minor))


ZERO = Money(0)
