"""Application service: the Transaction Engine.

Owns the customer Session and sequences every customer action against
the Catalog: inserting coins, selecting, purchasing and refunding.

States::

    IDLE --select--> SELECTED --purchase--> (DISPENSING) --> IDLE
      ^                 |  ^                                   ^
      |                 +--+ select another product            |
      +------------------- refund --> (REFUNDING) -------------+

DISPENSING and REFUNDING are momentary: they are observable only through
the events published while the engine passes through them.

No transition leaves the balance negative or a product's stock outside
[0, max_stock]. Every check that can fail runs before the first mutation.
"""

from __future__ import annotations

import logging

from vending.application.dto import ProductDTO, PurchaseResult, RefundResult
from vending.application.events import EngineEvent, EventKind, EventListener
from vending.application.save_catalog import save_catalog
from vending.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InsufficientFundsError,
    NoSelectionError,
    OutOfStockError,
)
from vending.domain.model.catalog import Catalog
from vending.domain.model.coin import Coin
from vending.domain.model.product import Product
from vending.domain.model.session import EngineState, Session
from vending.domain.model.value_objects import ZERO, Money
from vending.domain.repository.catalog_repository import CatalogRepository
from vending.domain.service.change_calculator import ChangeCalculator, describe
from vending.domain.service.coin_acceptor import CoinAcceptor

logger = logging.getLogger(__name__)


class TransactionEngine:

    def __init__(
        self,
        catalog: Catalog,
        coin_acceptor: CoinAcceptor,
        change_calculator: ChangeCalculator,
        catalog_repo: CatalogRepository,
        session: Session | None = None,
    ) -> None:
        self._catalog = catalog
        self._coin_acceptor = coin_acceptor
        self._change_calculator = change_calculator
        self._catalog_repo = catalog_repo
        self._session = session if session is not None else Session()
        self._listeners: list[EventListener] = []

    # --- Observation ----------------------------------------------------------

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def session(self) -> Session:
        return self._session

    @property
    def balance(self) -> Money:
        return self._session.balance

    @property
    def state(self) -> EngineState:
        return self._session.state

    @property
    def message(self) -> str:
        return self._session.message

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback that receives every EngineEvent."""
        self._listeners.append(listener)

    # --- Customer actions -----------------------------------------------------

    def insert_coin(self, denomination: int | Money) -> Money:
        """Accept one coin and return the new balance. State is unchanged."""
        try:
            balance = self._coin_acceptor.insert_coin(self._session, denomination)
        except DomainException as exc:
            self._fail(exc)
            raise
        self._session.message = f"Credit: {balance}"
        self._emit(EventKind.COIN_INSERTED)
        return balance

    def select(self, product_id: str) -> ProductDTO:
        """Select a product, replacing any earlier selection."""
        try:
            product = self._catalog.get(product_id)
            if product is None:
                self._session.clear_selection()
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            if product.is_out_of_stock:
                raise OutOfStockError(f"{product.name} is out of stock")
        except DomainException as exc:
            self._fail(exc)
            raise

        self._session.selected_id = product.id
        self._session.state = EngineState.SELECTED
        self._session.message = f"Selected: {product.name} - {product.price}"
        logger.debug("Selected %s", product.id)
        self._emit(EventKind.PRODUCT_SELECTED, product_id=product.id)
        return ProductDTO.from_product(product)

    def purchase(self) -> PurchaseResult:
        """Dispense the selected product if the balance covers its price.

        On success the stock is decremented, the balance is reset, the
        selection cleared and the change paid back, all in one step.
        """
        try:
            product = self._resolve_selection()
            price = product.price
            if self._session.balance < price:
                raise InsufficientFundsError(price - self._session.balance)

            paid = self._session.balance
            change = paid - price
            coins = self._change_calculator.make_change(change)
            self._catalog.adjust_stock(product.id, -1)
        except DomainException as exc:
            self._fail(exc)
            raise

        self._session.balance = ZERO
        self._session.selected_id = None
        self._session.state = EngineState.DISPENSING
        self._session.message = (
            f"Dispensing {product.name}. Change: {change}"
            if not change.is_zero
            else f"Dispensing {product.name}. Thank you!"
        )
        logger.info(
            "Sold %s for %s (paid %s, change %s)", product.id, price, paid, change
        )
        try:
            self._emit(EventKind.PRODUCT_DISPENSED, product_id=product.id, coins=coins)
        finally:
            self._session.state = EngineState.IDLE
            save_catalog(self._catalog, self._catalog_repo)
        return PurchaseResult(
            product=ProductDTO.from_product(product),
            paid=str(paid),
            change=str(change),
            change_cents=change.amount,
            coins=tuple(coins),
        )

    def refund(self) -> RefundResult:
        """Return the whole balance and clear the selection.

        With nothing inserted this raises NoBalanceError and changes nothing.
        """
        amount = self._session.balance
        try:
            coins = self._coin_acceptor.refund(self._session)
        except DomainException as exc:
            self._fail(exc)
            raise

        self._session.selected_id = None
        self._session.state = EngineState.REFUNDING
        self._session.message = f"Returned: {describe(coins)}"
        logger.info("Refunded %s", amount)
        try:
            self._emit(EventKind.COINS_RETURNED, coins=coins)
        finally:
            self._session.state = EngineState.IDLE
        return RefundResult(amount=str(amount), amount_cents=amount.amount, coins=tuple(coins))

    # --- Internal helpers -----------------------------------------------------

    def _resolve_selection(self) -> Product:
        """Look the selection up again; it may be dangling or sold out."""
        selected_id = self._session.selected_id
        if selected_id is None:
            raise NoSelectionError("Please select a product")

        product = self._catalog.get(selected_id)
        if product is None:
            self._session.clear_selection()
            raise EntityNotFoundError(
                f"Selected product '{selected_id}' is no longer available"
            )
        if product.is_out_of_stock:
            self._session.clear_selection()
            raise OutOfStockError(f"{product.name} is out of stock")
        return product

    def _fail(self, exc: DomainException) -> None:
        self._session.message = str(exc)
        logger.debug("%s: %s", type(exc).__name__, exc)
        self._emit(EventKind.TRANSACTION_FAILED, product_id=self._session.selected_id)

    def _emit(
        self,
        kind: EventKind,
        product_id: str | None = None,
        coins: list[Coin] | tuple[Coin, ...] = (),
    ) -> None:
        event = EngineEvent(
            kind=kind,
            message=self._session.message,
            balance=self._session.balance,
            product_id=product_id,
            coins=tuple(coins),
        )
        for listener in self._listeners:
            listener(event)
