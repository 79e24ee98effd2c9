import logging

import click

from vending.infrastructure.cli.catalog_commands import catalog_reset
from vending.infrastructure.cli.machine_commands import (
    machine_buy,
    machine_coins,
    machine_run,
)
from vending.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_restock,
    product_update,
)
from vending.infrastructure.settings import load_settings


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """Vending Machine: coins in, snacks and change out."""
    level = "DEBUG" if verbose else load_settings().LOG_LEVEL.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def machine() -> None:
    """Use the machine as a customer."""


@cli.group()
def product() -> None:
    """Manage products (admin mode)."""


@cli.group()
def catalog() -> None:
    """Manage the stored catalog."""


# Register subcommands
machine.add_command(machine_buy)
machine.add_command(machine_coins)
machine.add_command(machine_run)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_update)
catalog.add_command(catalog_reset)
