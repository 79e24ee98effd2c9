"""Domain service: greedy change-making over the accepted coins."""

from __future__ import annotations

from vending.domain.exceptions import InvalidAmountError
from vending.domain.model.coin import Coin, DenominationSet
from vending.domain.model.value_objects import Money


class ChangeCalculator:
    """Turns an amount into the fewest coins that add up to it exactly.

    Greedy is only correct for canonical coin systems; DenominationSet
    refuses to exist otherwise, so this class can rely on it.
    """

    def __init__(self, denominations: DenominationSet) -> None:
        self._denominations = denominations

    def make_change(self, amount: Money) -> list[Coin]:
        """Return coins, highest value first, summing exactly to *amount*."""
        if not self._denominations.can_represent(amount):
            raise InvalidAmountError(
                f"{amount} cannot be paid out exactly; amounts must be a "
                f"multiple of {self._denominations.smallest}"
            )

        remaining = amount.amount
        coins: list[Coin] = []
        for coin in self._denominations:
            count, remaining = divmod(remaining, coin.value.amount)
            coins.extend([coin] * count)

        assert remaining == 0, f"greedy change left {remaining} of {amount}"
        assert sum(c.value.amount for c in coins) == amount.amount
        return coins


def total(coins: list[Coin]) -> Money:
    return Money(sum(c.value.amount for c in coins))


def describe(coins: list[Coin]) -> str:
    """Human-readable breakdown, e.g. ``€1, 50c, 20c``."""
    return ", ".join(c.label for c in coins)
