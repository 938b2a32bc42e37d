"""
Commands - CLI command implementations.

- contracts: List the contracts in the selected registry
- deploy:    Deploy a registry contract
- call:      Call a method on a deployed contract
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Awaitable, TypeVar

import click

from ..chain.artifacts import ContractArtifact, require_contract
from ..config import ChainOptions
from ..exceptions import ContractNotFoundError, ReviveError

T = TypeVar("T")


def run(coro: Awaitable[T]) -> T:
    """Run a coroutine, turning library errors into a red message and exit code."""
    try:
        return asyncio.run(coro)
    except ReviveError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)


def parse_args_json(args_json: str) -> list[Any]:
    try:
        args = json.loads(args_json)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc}", param_hint="--args") from exc
    if not isinstance(args, list):
        raise click.BadParameter("Args must be a JSON array", param_hint="--args")
    return args


def load_artifact(options: ChainOptions, name: str) -> ContractArtifact:
    """Read a contract from the selected registry before anything touches the chain."""
    path = options.contracts_file
    try:
        return require_contract(name, path)
    except FileNotFoundError:
        click.secho(f"ERROR: Registry {path} not found", fg="red", err=True)
        sys.exit(1)
    except ContractNotFoundError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)
