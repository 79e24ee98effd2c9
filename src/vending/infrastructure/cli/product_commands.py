"""CLI commands for the Catalog (admin mode)."""

from __future__ import annotations

import click

from vending.application.add_product import AddProductHandler
from vending.application.delete_product import DeleteProductHandler
from vending.application.dto import ProductDTO
from vending.application.list_products import ListProductsHandler
from vending.application.restock_product import RestockProductHandler
from vending.application.update_product import UpdateProductHandler
from vending.domain.exceptions import DomainException
from vending.infrastructure.bootstrap import catalog_repository, load_catalog
from vending.infrastructure.settings import load_settings


def _display_products(products: list[ProductDTO]) -> None:
    """Shared formatting for a product table."""
    click.echo(f"{'ID':<34} {'':<2} {'Name':<16} {'Price':>8} {'Stock':>7}")
    click.echo("-" * 71)
    for p in products:
        stock = "SOLD OUT" if p.out_of_stock else f"{p.stock}/{p.max_stock}"
        click.echo(f"{p.id:<34} {p.icon:<2} {p.name:<16} {p.price:>8} {stock:>7}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        catalog = load_catalog()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    products = ListProductsHandler(catalog).handle()
    if not products:
        click.echo("No products found.")
        return
    _display_products(products)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price in euros (e.g. 1.50).")
@click.option("--stock", default=0, type=int, show_default=True, help="Initial stock.")
@click.option("--max-stock", type=int, default=None, help="Slot capacity (default from settings).")
@click.option("--icon", default="📦", help="Emoji shown next to the name.")
def product_add(name: str, price: str, stock: int, max_stock: int | None, icon: str) -> None:
    """Add a new product to the catalog."""
    settings = load_settings()
    try:
        catalog = load_catalog(settings)
        handler = AddProductHandler(catalog, catalog_repository(settings))
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            max_stock=max_stock if max_stock is not None else settings.DEFAULT_MAX_STOCK,
            icon=icon,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price in euros (e.g. 1.75).")
@click.option("--stock", type=int, default=None, help="New stock level.")
@click.option("--max-stock", type=int, default=None, help="New slot capacity.")
@click.option("--icon", default=None, help="New emoji.")
def product_update(
    product_id: str,
    name: str | None,
    price: str | None,
    stock: int | None,
    max_stock: int | None,
    icon: str | None,
) -> None:
    """Update one or more fields of a product."""
    settings = load_settings()
    try:
        catalog = load_catalog(settings)
        handler = UpdateProductHandler(catalog, catalog_repository(settings))
        product = handler.handle(
            product_id,
            name=name,
            price=price,
            stock=stock,
            max_stock=max_stock,
            icon=icon,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {product.id} updated: {product.name} {product.price} "
        f"({product.stock}/{product.max_stock})"
    )


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="Delete this product?")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog."""
    settings = load_settings()
    try:
        catalog = load_catalog(settings)
        product = DeleteProductHandler(catalog, catalog_repository(settings)).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' deleted.")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Units to add (negative to remove).")
def product_restock(product_id: str, delta: int) -> None:
    """Add or remove units of a product."""
    settings = load_settings()
    try:
        catalog = load_catalog(settings)
        product = RestockProductHandler(catalog, catalog_repository(settings)).handle(
            product_id, delta
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{product.name} stock is now {product.stock}/{product.max_stock}")
