"""
Chain context: one RPC connection plus one signer.

Every deploy / call runs against an explicit ``ChainContext`` instead of
process-wide globals, so several contexts (different keys or endpoints)
can live side by side.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional

import click
import httpx

from .chain.artifacts import ContractArtifact, get_contract, list_contracts, require_contract
from .chain.rpc import RpcClient
from .config import ChainOptions
from .node import GethNode, launch_geth
from .wallet.keys import load_private_key
from .wallet.signer import Signer, resolve_signer


@dataclass
class ChainContext:
    rpc: RpcClient
    signer: Signer
    contracts_file: Path
    node: Optional[GethNode] = None

    def get_contract(self, name: str) -> Optional[ContractArtifact]:
        return get_contract(name, self.contracts_file)

    def require_contract(self, name: str) -> ContractArtifact:
        return require_contract(name, self.contracts_file)

    def list_contracts(self) -> list[str]:
        return list_contracts(self.contracts_file)


@asynccontextmanager
async def open_context(
    options: ChainOptions,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[ChainContext]:
    """
    Connect to the selected endpoint and resolve the signer.

    Launches a Geth dev node first when ``options.geth`` is set; the node
    is stopped again when the context exits.

    Args:
        options: Parsed command-line options
        transport: Optional httpx transport (used by tests)
    """
    node = await launch_geth() if options.geth else None
    try:
        async with RpcClient(options.rpc_url, transport=transport) as rpc:
            signer = await resolve_signer(rpc, load_private_key(options.private_key))
            nonce = await signer.get_nonce()
            click.echo(f"Signer address: {signer.address}, Nonce: {nonce}")
            yield ChainContext(
                rpc=rpc,
                signer=signer,
                contracts_file=options.contracts_file,
                node=node,
            )
    finally:
        if node is not None:
            node.stop()
