"""
revive-examples CLI

Deploys and calls pre-built contracts against a local Geth dev node or
the Westend Asset Hub Ethereum RPC endpoint.

Global options:
  -k, --private-key  Sign with this key instead of a node account
  --geth             Launch a local Geth dev node (uses evm-contracts.json)
  --westend          Target Westend Asset Hub

Commands:
  contracts - List contracts in the selected registry
  deploy    - Deploy a registry contract
  call      - Call a method on a deployed contract

Without a command, connects and prints the signer address and nonce.
"""

from __future__ import annotations

from typing import Optional

import click

from .config import ChainOptions
from .commands import run
from .context import open_context


# ============ Constants ============

VERSION = "0.1.0"


async def _connect(options: ChainOptions) -> None:
    async with open_context(options):
        pass


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="revive-examples")
@click.option("--private-key", "-k", default=None, help="Hex private key to sign with")
@click.option("--geth", is_flag=True, help="Launch and use a local Geth dev node")
@click.option("--westend", is_flag=True, help="Use the Westend Asset Hub RPC endpoint")
@click.pass_context
def cli(ctx: click.Context, private_key: Optional[str], geth: bool, westend: bool) -> None:
    """Deploy and call contracts on an Ethereum JSON-RPC endpoint."""
    try:
        ctx.obj = ChainOptions(private_key=private_key, geth=geth, westend=westend)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    if ctx.invoked_subcommand is None:
        run(_connect(ctx.obj))


# ============ Commands ============

from .commands.call import call
from .commands.contracts import contracts
from .commands.deploy import deploy

cli.add_command(contracts)
cli.add_command(deploy)
cli.add_command(call)


# ============ Entry Points ============


def main() -> None:
    """revive-examples CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
