"""
Runtime configuration for revive-examples.

Endpoints, registry file names and the dev-node command line are fixed
constants; a few of them can be overridden through the environment
(or a ``.env`` file in the working directory).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

LOCAL_RPC_URL = "http://localhost:8545"
WESTEND_RPC_URL = "https://westend-asset-hub-eth-rpc.polkadot.io"

EVM_CONTRACTS_FILE = "evm-contracts.json"
PVM_CONTRACTS_FILE = "pvm-contracts.json"

GETH_HTTP_PORT = 8545
GETH_ARGS: tuple[str, ...] = (
    "--http",
    "--http.api",
    "web3,eth,debug,personal,net",
    "--http.port",
    str(GETH_HTTP_PORT),
    "--dev",
    "--verbosity",
    "0",
)

# Environment overrides
RPC_URL_ENV = "REVIVE_RPC_URL"
GETH_BINARY_ENV = "GETH_BINARY"
PRIVATE_KEY_ENV = "PRIVATE_KEY"


def get_geth_binary() -> str:
    """Get the geth executable from environment or default."""
    return os.environ.get(GETH_BINARY_ENV, "geth")


@dataclass(frozen=True)
class ChainOptions:
    """Options parsed from the command line.

    ``geth`` selects a locally launched dev node (and the EVM registry),
    ``westend`` selects the public Westend Asset Hub endpoint.
    """

    private_key: Optional[str] = None
    geth: bool = False
    westend: bool = False

    def __post_init__(self) -> None:
        if self.geth and self.westend:
            raise ValueError("--geth and --westend are mutually exclusive")

    @property
    def rpc_url(self) -> str:
        override = os.environ.get(RPC_URL_ENV)
        if override:
            return override
        return WESTEND_RPC_URL if self.westend else LOCAL_RPC_URL

    @property
    def contracts_file(self) -> Path:
        return Path(EVM_CONTRACTS_FILE if self.geth else PVM_CONTRACTS_FILE)
