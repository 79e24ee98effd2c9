"""CLI commands for the stored catalog as a whole."""

from __future__ import annotations

import click

from vending.domain.exceptions import PersistenceError
from vending.infrastructure.bootstrap import catalog_repository


@click.command("reset")
@click.confirmation_option(prompt="Forget the stored catalog and re-seed on next start?")
def catalog_reset() -> None:
    """Delete the stored catalog; the default products return on next use."""
    repo = catalog_repository()
    try:
        repo.clear()
    except PersistenceError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stored catalog cleared ({repo.file_path}).")
