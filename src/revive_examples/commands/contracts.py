"""List the contracts available in the selected registry."""

from __future__ import annotations

import sys

import click

from ..chain.artifacts import list_contracts
from ..config import ChainOptions


@click.command("contracts")
@click.pass_obj
def contracts(options: ChainOptions) -> None:
    """List contracts in the registry for the selected network."""
    path = options.contracts_file
    try:
        names = list_contracts(path)
    except FileNotFoundError:
        click.secho(f"ERROR: Registry {path} not found", fg="red", err=True)
        sys.exit(1)

    if not names:
        click.echo(f"No contracts in {path}.")
        return

    click.echo(f"Contracts in {path}:")
    for name in names:
        click.echo(f"  {name}")
