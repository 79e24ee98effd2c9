"""Tests for the TransactionEngine use cases.

Uses in-memory fakes, no file I/O.
"""

import pytest

from vending.application.events import EventKind
from vending.application.transaction_engine import TransactionEngine
from vending.domain.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    NoBalanceError,
    NoSelectionError,
    OutOfStockError,
    UnsupportedDenominationError,
)
from vending.domain.model.catalog import Catalog
from vending.domain.model.session import EngineState
from vending.domain.model.value_objects import ZERO, Money
from vending.domain.service.change_calculator import ChangeCalculator, total
from vending.domain.service.coin_acceptor import CoinAcceptor
from tests.fakes import FakeCatalogRepository, make_catalog


def _setup(
    catalog: Catalog | None = None,
) -> tuple[TransactionEngine, Catalog, FakeCatalogRepository]:
    """Build an engine over the default fake catalog."""
    catalog = catalog or make_catalog()
    repo = FakeCatalogRepository()
    calculator = ChangeCalculator(catalog.denominations)
    engine = TransactionEngine(
        catalog=catalog,
        coin_acceptor=CoinAcceptor(catalog.denominations, calculator),
        change_calculator=calculator,
        catalog_repo=repo,
    )
    return engine, catalog, repo


def _insert(engine: TransactionEngine, *values: int) -> None:
    for value in values:
        engine.insert_coin(value)


class TestInsertCoin:

    def test_starts_idle_with_zero_balance(self):
        engine, _, _ = _setup()
        assert engine.balance == ZERO
        assert engine.state == EngineState.IDLE
        assert engine.message == "Welcome! Insert coins"

    def test_balance_accumulates(self):
        engine, _, _ = _setup()
        _insert(engine, 100, 50, 20)
        assert engine.balance == Money(170)
        assert engine.message == "Credit: €1.70"

    def test_unsupported_coin_rejected(self):
        engine, _, _ = _setup()
        _insert(engine, 100)
        with pytest.raises(UnsupportedDenominationError):
            engine.insert_coin(3)
        assert engine.balance == Money(100)
        assert "Unsupported coin" in engine.message

    def test_insert_keeps_selection(self):
        engine, _, _ = _setup()
        engine.select("1")
        _insert(engine, 50)
        assert engine.state == EngineState.SELECTED
        assert engine.session.selected_id == "1"


class TestSelect:

    def test_select_moves_to_selected(self):
        engine, _, _ = _setup()
        dto = engine.select("1")
        assert dto.name == "Espresso"
        assert engine.state == EngineState.SELECTED
        assert engine.message == "Selected: Espresso - €1.60"

    def test_reselect_replaces_selection(self):
        engine, _, _ = _setup()
        _insert(engine, 200)
        engine.select("1")
        engine.select("2")
        assert engine.session.selected_id == "2"
        assert engine.balance == Money(200)

    def test_unknown_product(self):
        engine, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            engine.select("99")
        assert engine.state == EngineState.IDLE

    def test_out_of_stock_leaves_balance_and_selection(self):
        engine, _, _ = _setup()
        _insert(engine, 100, 50)
        with pytest.raises(OutOfStockError, match="out of stock"):
            engine.select("3")
        assert engine.balance == Money(150)
        assert engine.session.selected_id is None
        assert engine.state == EngineState.IDLE

    def test_out_of_stock_keeps_previous_selection(self):
        engine, _, _ = _setup()
        engine.select("1")
        with pytest.raises(OutOfStockError):
            engine.select("3")
        assert engine.session.selected_id == "1"
        assert engine.state == EngineState.SELECTED

    def test_reselecting_deleted_product_returns_to_idle(self):
        engine, catalog, _ = _setup()
        _insert(engine, 200)
        engine.select("2")
        catalog.delete("2")

        with pytest.raises(EntityNotFoundError):
            engine.select("2")

        assert engine.state == EngineState.IDLE
        assert engine.session.selected_id is None
        assert engine.balance == Money(200)


class TestPurchaseHappyPath:

    def test_purchase_with_change(self):
        engine, catalog, _ = _setup()
        _insert(engine, 100, 50, 20)
        engine.select("1")

        result = engine.purchase()

        assert catalog.require("1").stock == 9
        assert result.change_cents == 10
        assert total(list(result.coins)) == Money(10)
        assert engine.balance == ZERO
        assert engine.session.selected_id is None
        assert engine.state == EngineState.IDLE
        assert engine.message == "Dispensing Espresso. Change: €0.10"

    def test_exact_payment_returns_no_coins(self):
        engine, _, _ = _setup()
        _insert(engine, 50, 20, 20)
        engine.select("4")
        result = engine.purchase()
        assert result.coins == ()
        assert result.change == "€0.00"
        assert engine.message == "Dispensing Water. Thank you!"

    def test_coins_inserted_after_selection_count(self):
        engine, _, _ = _setup()
        engine.select("2")
        _insert(engine, 200, 20)
        assert engine.purchase().product.name == "Croissant"

    def test_purchase_saves_catalog(self):
        engine, _, repo = _setup()
        _insert(engine, 200)
        engine.select("1")
        engine.purchase()
        assert repo.save_count == 1
        assert next(p for p in repo.stored if p.id == "1").stock == 9

    def test_save_failure_does_not_undo_purchase(self):
        engine, catalog, repo = _setup()
        repo.fail_on_save = True
        _insert(engine, 200)
        engine.select("1")
        engine.purchase()
        assert catalog.require("1").stock == 9
        assert engine.balance == ZERO

    def test_uses_price_current_at_purchase_time(self):
        engine, catalog, _ = _setup()
        engine.select("1")
        catalog.update("1", price=Money(200))
        _insert(engine, 200)
        assert engine.purchase().change_cents == 0

    def test_last_unit_can_be_sold_then_is_out_of_stock(self):
        engine, catalog, _ = _setup()
        _insert(engine, 100)
        engine.select("4")
        engine.purchase()
        assert catalog.require("4").stock == 0
        with pytest.raises(OutOfStockError):
            engine.select("4")


class TestPurchaseFailures:

    def test_insufficient_funds_reports_exact_shortfall(self):
        engine, catalog, repo = _setup()
        _insert(engine, 100, 20)
        engine.select("1")

        with pytest.raises(InsufficientFundsError) as exc_info:
            engine.purchase()

        assert exc_info.value.shortfall == Money(40)
        assert engine.message == "Insert €0.40 more"
        assert catalog.require("1").stock == 10
        assert engine.balance == Money(120)
        assert engine.state == EngineState.SELECTED
        assert repo.save_count == 0

    def test_purchase_without_selection(self):
        engine, _, _ = _setup()
        _insert(engine, 200)
        with pytest.raises(NoSelectionError):
            engine.purchase()
        assert engine.balance == Money(200)

    def test_no_selection_is_a_not_found(self):
        engine, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            engine.purchase()

    def test_deleted_selection_is_detected(self):
        engine, catalog, _ = _setup()
        _insert(engine, 200)
        engine.select("2")
        catalog.delete("2")

        with pytest.raises(EntityNotFoundError, match="no longer available"):
            engine.purchase()

        assert engine.state == EngineState.IDLE
        assert engine.session.selected_id is None
        assert engine.balance == Money(200)

    def test_selection_sold_out_since_selecting(self):
        engine, catalog, _ = _setup()
        _insert(engine, 100)
        engine.select("4")
        catalog.adjust_stock("4", -1)

        with pytest.raises(OutOfStockError):
            engine.purchase()

        assert engine.session.selected_id is None
        assert engine.balance == Money(100)


class TestOutOfStockScenario:

    def test_out_of_stock_product_cannot_be_bought(self):
        engine, _, _ = _setup()
        _insert(engine, 100, 50)
        with pytest.raises(OutOfStockError):
            engine.select("3")
        with pytest.raises(EntityNotFoundError):
            engine.purchase()


class TestRefund:

    def test_refund_returns_balance_and_clears_selection(self):
        engine, catalog, _ = _setup()
        _insert(engine, 100, 50, 20)
        engine.select("1")

        result = engine.refund()

        assert result.amount_cents == 170
        assert total(list(result.coins)) == Money(170)
        assert engine.balance == ZERO
        assert engine.session.selected_id is None
        assert engine.state == EngineState.IDLE
        assert engine.message == "Returned: €1, 50c, 20c"
        assert catalog.require("1").stock == 10

    def test_refund_with_zero_balance_changes_nothing(self):
        engine, _, _ = _setup()
        engine.select("1")

        with pytest.raises(NoBalanceError):
            engine.refund()

        assert engine.balance == ZERO
        assert engine.session.selected_id == "1"
        assert engine.state == EngineState.SELECTED
        assert engine.message == "No change to return"


class TestEvents:

    def test_successful_purchase_publishes_events_in_order(self):
        engine, _, _ = _setup()
        events = []
        engine.subscribe(events.append)

        _insert(engine, 200)
        engine.select("1")
        engine.purchase()

        assert [e.kind for e in events] == [
            EventKind.COIN_INSERTED,
            EventKind.PRODUCT_SELECTED,
            EventKind.PRODUCT_DISPENSED,
        ]
        dispensed = events[-1]
        assert dispensed.product_id == "1"
        assert total(list(dispensed.coins)) == Money(40)

    def test_engine_is_dispensing_while_event_is_delivered(self):
        engine, _, _ = _setup()
        states = []
        engine.subscribe(lambda e: states.append(engine.state))
        _insert(engine, 200)
        engine.select("1")
        engine.purchase()
        assert states[-1] == EngineState.DISPENSING
        assert engine.state == EngineState.IDLE

    def test_failure_publishes_event(self):
        engine, _, _ = _setup()
        events = []
        engine.subscribe(events.append)
        with pytest.raises(NoBalanceError):
            engine.refund()
        assert events[0].kind == EventKind.TRANSACTION_FAILED
        assert events[0].message == "No change to return"

    def test_refund_publishes_coins_returned(self):
        engine, _, _ = _setup()
        events = []
        engine.subscribe(events.append)
        _insert(engine, 50)
        engine.refund()
        assert events[-1].kind == EventKind.COINS_RETURNED
        assert events[-1].balance == ZERO

    def test_failing_listener_does_not_leave_purchase_half_done(self):
        engine, catalog, repo = _setup()
        _insert(engine, 200)
        engine.select("1")

        def explode(event):
            if event.kind == EventKind.PRODUCT_DISPENSED:
                raise RuntimeError("display unplugged")

        engine.subscribe(explode)
        with pytest.raises(RuntimeError):
            engine.purchase()

        assert engine.state == EngineState.IDLE
        assert catalog.require("1").stock == 9
        assert repo.save_count == 1

    def test_failing_listener_still_ends_refund_idle(self):
        engine, _, _ = _setup()
        _insert(engine, 50)

        def explode(event):
            if event.kind == EventKind.COINS_RETURNED:
                raise RuntimeError("display unplugged")

        engine.subscribe(explode)
        with pytest.raises(RuntimeError):
            engine.refund()

        assert engine.state == EngineState.IDLE
        assert engine.balance == ZERO
