"""CLI commands for the customer side of the machine."""

from __future__ import annotations

import click

from vending.application.list_products import ListProductsHandler
from vending.application.transaction_engine import TransactionEngine
from vending.domain.exceptions import (
    DomainException,
    NoBalanceError,
    UnsupportedDenominationError,
)
from vending.domain.model.catalog import Catalog
from vending.domain.model.coin import DenominationSet
from vending.domain.model.value_objects import Money
from vending.domain.service.change_calculator import describe
from vending.infrastructure.bootstrap import load_catalog, transaction_engine
from vending.infrastructure.settings import load_settings


def _parse_coin(raw: str, denominations: DenominationSet) -> Money:
    """Accept a coin label (``50c``, ``€1``), euros (``0.50``) or cents (``50``)."""
    token = raw.strip().lower()
    for coin in denominations:
        if token == coin.label.lower():
            return coin.value
    try:
        if "." in token:
            return Money.of(token.lstrip("€"))
        return Money(int(token))
    except (ValueError, DomainException):
        raise UnsupportedDenominationError(raw)


def _parse_coins(raw: str, denominations: DenominationSet) -> list[Money]:
    """Parse '100,50,20' into a list of coin values."""
    return [_parse_coin(part, denominations) for part in raw.split(",") if part.strip()]


def _echo_products(catalog: Catalog) -> None:
    for p in ListProductsHandler(catalog).handle():
        stock = "OUT OF STOCK" if p.out_of_stock else f"Qty: {p.stock}"
        click.echo(f"  [{p.id}] {p.icon} {p.name:<16} {p.price:>7}  {stock}")


def _return_balance(engine: TransactionEngine) -> None:
    """Pay back whatever is still inserted, if anything."""
    if engine.balance.is_zero:
        return
    refund = engine.refund()
    click.echo(f"Returned {refund.amount}: {describe(list(refund.coins))}")


@click.command("coins")
def machine_coins() -> None:
    """Show the accepted coins."""
    try:
        catalog = load_catalog()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    labels = ", ".join(c.label for c in catalog.denominations)
    click.echo(f"Accepted coins: {labels}")


@click.command("buy")
@click.option("--product", "product_id", required=True, help="Product ID to buy.")
@click.option("--coins", "coins_str", required=True, help="Coins as '100,50,20' (cents) or '€1,50c'.")
def machine_buy(product_id: str, coins_str: str) -> None:
    """Insert coins and buy one product in a single step."""
    settings = load_settings()
    try:
        catalog = load_catalog(settings)
        coins = _parse_coins(coins_str, catalog.denominations)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    engine = transaction_engine(catalog, settings)
    try:
        for value in coins:
            engine.insert_coin(value)
        engine.select(product_id)
        result = engine.purchase()
    except DomainException as exc:
        _return_balance(engine)
        raise click.ClickException(str(exc))

    click.echo(engine.message)
    if result.coins:
        click.echo(f"Change coins: {describe(list(result.coins))}")


_HELP = """Commands:
  insert <coin>...  insert coins (50c, €1, 0.50 or 50)
  select <id>       choose a product
  buy               purchase the selected product
  refund            return inserted coins
  list              show products
  help              show this help
  quit              leave (returns any balance)"""


def _run_command(engine: TransactionEngine, words: list[str]) -> bool:
    """Execute one session command; return False when the session should end."""
    command, args = words[0].lower(), words[1:]

    if command in ("quit", "exit"):
        return False
    if command == "help":
        click.echo(_HELP)
    elif command == "list":
        _echo_products(engine.catalog)
    elif command == "insert" and args:
        for raw in args:
            engine.insert_coin(_parse_coin(raw, engine.catalog.denominations))
        click.echo(engine.message)
    elif command == "select" and len(args) == 1:
        engine.select(args[0])
        click.echo(engine.message)
    elif command == "buy":
        result = engine.purchase()
        click.echo(engine.message)
        if result.coins:
            click.echo(f"Change coins: {describe(list(result.coins))}")
    elif command == "refund":
        engine.refund()
        click.echo(engine.message)
    else:
        click.echo(f"Unknown command: {' '.join(words)} (type 'help')")
    return True


@click.command("run")
def machine_run() -> None:
    """Start an interactive vending session."""
    settings = load_settings()
    try:
        catalog = load_catalog(settings)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    engine = transaction_engine(catalog, settings)

    click.echo(engine.message)
    _echo_products(catalog)
    click.echo("Type 'help' for commands.")

    while True:
        try:
            line = click.prompt(
                f"[{engine.balance}]", prompt_suffix=" > ", default="", show_default=False
            )
        except click.Abort:
            break
        words = line.split()
        if not words:
            continue
        try:
            if not _run_command(engine, words):
                break
        except NoBalanceError as exc:
            click.echo(str(exc))
        except DomainException as exc:
            click.echo(f"Error: {exc}")

    _return_balance(engine)
    click.echo("Goodbye!")
