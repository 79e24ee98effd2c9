"""Coins and the set of denominations the machine accepts."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from vending.domain.exceptions import (
    InvalidDenominationSetError,
    UnsupportedDenominationError,
)
from vending.domain.model.value_objects import MINOR_UNITS_PER_MAJOR, Money

DEFAULT_DENOMINATIONS = (5, 10, 20, 50, 100, 200)


@dataclass(frozen=True, order=True)
class Coin:
    """A single physical coin of a fixed value."""

    value: Money

    @property
    def label(self) -> str:
        """Short label as printed on the coin: ``5c``, ``50c``, ``€1``, ``€2``."""
        cents = self.value.amount
        if cents % MINOR_UNITS_PER_MAJOR == 0:
            return f"€{cents // MINOR_UNITS_PER_MAJOR}"
        if cents < MINOR_UNITS_PER_MAJOR:
            return f"{cents}c"
        return str(self.value)

    def __str__(self) -> str:
        return self.label


class DenominationSet:
    """The accepted coins, ordered highest to lowest.

    Invariants (checked on construction):
    - at least one coin, every value positive and distinct
    - the smallest coin divides every other coin
    - greedy change-making is optimal for every amount (canonical system)

    With those in place an amount can be paid out exactly iff it is a
    multiple of the smallest coin, and the greedy algorithm finds the
    fewest coins for it.
    """

    def __init__(self, values: Iterable[int | Money]) -> None:
        cents = [v.amount if isinstance(v, Money) else v for v in values]
        _validate(cents)
        ordered = sorted(cents, reverse=True)
        self._coins = tuple(Coin(Money(v)) for v in ordered)
        self._by_value = {coin.value: coin for coin in self._coins}

    @property
    def coins(self) -> tuple[Coin, ...]:
        """Coins from highest to lowest value."""
        return self._coins

    @property
    def smallest(self) -> Money:
        return self._coins[-1].value

    def coin_for(self, value: int | Money) -> Coin:
        """Return the accepted coin worth *value* or raise."""
        key = value if isinstance(value, Money) else _as_money(value)
        coin = self._by_value.get(key) if key is not None else None
        if coin is None:
            raise UnsupportedDenominationError(value)
        return coin

    def can_represent(self, amount: Money) -> bool:
        """True if *amount* can be paid exactly with these coins."""
        return amount.amount % self.smallest.amount == 0

    def __iter__(self) -> Iterator[Coin]:
        return iter(self._coins)

    def __len__(self) -> int:
        return len(self._coins)

    def __contains__(self, value: object) -> bool:
        if isinstance(value, Coin):
            value = value.value
        if isinstance(value, int) and not isinstance(value, bool):
            value = _as_money(value)
        return value in self._by_value

    def __repr__(self) -> str:
        values = ", ".join(str(c.value.amount) for c in self._coins)
        return f"DenominationSet([{values}])"


# --- Validation helpers ------------------------------------------------------


def _as_money(value: object) -> Money | None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        return None
    return Money(value)


def _validate(values: list[int]) -> None:
    if not values:
        raise InvalidDenominationSetError("At least one coin denomination is required")
    for v in values:
        if not isinstance(v, int) or isinstance(v, bool) or v <= 0:
            raise InvalidDenominationSetError(
                f"Coin denominations must be positive integers, got {v!r}"
            )
    if len(set(values)) != len(values):
        raise InvalidDenominationSetError(f"Duplicate coin denominations in {values}")

    smallest = min(values)
    for v in values:
        if v % smallest:
            raise InvalidDenominationSetError(
                f"Smallest coin {smallest} must divide every other coin, "
                f"but does not divide {v}"
            )

    counterexample = find_greedy_counterexample(values)
    if counterexample is not None:
        raise InvalidDenominationSetError(
            f"Coin set {sorted(values)} is not canonical: greedy change for "
            f"{counterexample} does not use the fewest coins"
        )


def find_greedy_counterexample(values: Iterable[int]) -> int | None:
    """Return the smallest amount where greedy change is not optimal, or None.

    Amounts are scaled by the smallest coin so the system contains a unit
    coin. By Kozen & Zaks (1994) the smallest counterexample, if one exists,
    is below the sum of the two largest coins, so checking that range is
    enough.
    """
    ordered = sorted(set(values), reverse=True)
    unit = ordered[-1]
    scaled = [v // unit for v in ordered]
    if len(scaled) < 3:
        return None

    bound = scaled[0] + scaled[1]
    fewest = [0] * bound
    for x in range(1, bound):
        fewest[x] = min(fewest[x - c] + 1 for c in scaled if c <= x)

    for x in range(1, bound):
        remaining, count = x, 0
        for c in scaled:
            count += remaining // c
            remaining %= c
        if count > fewest[x]:
            return x * unit
    return None
