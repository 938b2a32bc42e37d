"""Deploy a contract from the registry."""

from __future__ import annotations

import click

from ..chain.artifacts import ContractArtifact
from ..chain.tx import deploy as deploy_contract
from ..config import ChainOptions
from ..context import open_context
from . import load_artifact, parse_args_json, run


async def _deploy(options: ChainOptions, artifact: ContractArtifact, args: list) -> str:
    async with open_context(options) as ctx:
        return await deploy_contract(ctx, artifact.bytecode, artifact.abi, args)


@click.command("deploy")
@click.argument("name")
@click.option("--args", "args_json", default="[]", help="Constructor args as JSON array")
@click.pass_obj
def deploy(options: ChainOptions, name: str, args_json: str) -> None:
    """Deploy contract NAME from the registry."""
    args = parse_args_json(args_json)
    artifact = load_artifact(options, name)
    address = run(_deploy(options, artifact, args))
    click.secho(f"SUCCESS: {name} deployed at {address}", fg="green")
