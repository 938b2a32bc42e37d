"""Call a method on a deployed registry contract."""

from __future__ import annotations

from typing import Optional

import click

from ..chain.artifacts import ContractArtifact
from ..chain.tx import call as call_contract
from ..config import ChainOptions
from ..context import open_context
from . import load_artifact, parse_args_json, run


async def _call(
    options: ChainOptions,
    artifact: ContractArtifact,
    address: str,
    method: str,
    args: list,
    value: Optional[int],
) -> Optional[dict]:
    async with open_context(options) as ctx:
        return await call_contract(ctx, method, address, artifact.abi, args, value=value)


@click.command("call")
@click.argument("name")
@click.argument("address")
@click.argument("method")
@click.option("--args", "args_json", default="[]", help="Call args as JSON array")
@click.option("--value", default=None, type=int, help="Value to attach, in wei")
@click.pass_obj
def call(
    options: ChainOptions,
    name: str,
    address: str,
    method: str,
    args_json: str,
    value: Optional[int],
) -> None:
    """Call METHOD on the NAME contract deployed at ADDRESS."""
    args = parse_args_json(args_json)
    artifact = load_artifact(options, name)
    receipt = run(_call(options, artifact, address, method, args, value))
    if receipt is None:
        click.secho("SUCCESS: Read-only call, no transaction sent", fg="green")
    else:
        click.secho("SUCCESS: Transaction confirmed!", fg="green")
        click.echo(f"  TX: {receipt.get('transactionHash')}")
        click.echo(f"  Block: {int(receipt.get('blockNumber') or '0x0', 16)}")
