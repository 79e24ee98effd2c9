"""Domain service: accepts coins into a session and pays them back out."""

from __future__ import annotations

import logging

from vending.domain.exceptions import NoBalanceError
from vending.domain.model.coin import Coin, DenominationSet
from vending.domain.model.session import Session
from vending.domain.model.value_objects import ZERO, Money
from vending.domain.service.change_calculator import ChangeCalculator

logger = logging.getLogger(__name__)


class CoinAcceptor:

    def __init__(
        self,
        denominations: DenominationSet,
        change_calculator: ChangeCalculator,
    ) -> None:
        self._denominations = denominations
        self._change_calculator = change_calculator

    def insert_coin(self, session: Session, denomination: int | Money) -> Money:
        """Add one coin to the session balance and return the new balance.

        Raises UnsupportedDenominationError for anything that is not an
        accepted coin, even though the UI only offers valid ones.
        """
        coin = self._denominations.coin_for(denomination)
        session.balance = session.balance + coin.value
        logger.debug("Accepted %s, balance now %s", coin.label, session.balance)
        return session.balance

    def refund(self, session: Session) -> list[Coin]:
        """Return the whole balance as coins and reset it to zero."""
        if session.balance.is_zero:
            raise NoBalanceError()
        coins = self._change_calculator.make_change(session.balance)
        session.balance = ZERO
        return coins
