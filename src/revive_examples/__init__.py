__all__ = [
    # Configuration
    "ChainOptions",
    # Context
    "ChainContext",
    "open_context",
    # Registry
    "ContractArtifact",
    "get_contract",
    "require_contract",
    "list_contracts",
    # Operations
    "deploy",
    "call",
    "read",
    # ABI
    "MethodTable",
    "AbiMethod",
    # Signers
    "Signer",
    "LocalSigner",
    "NodeSigner",
    # Node
    "GethNode",
    "launch_geth",
    # Errors
    "ReviveError",
    "RpcError",
    "RpcConnectionError",
    "SignerUnavailableError",
    "NodeStartupError",
    "TransactionFailedError",
    "AbiError",
    "MethodNotFoundError",
    "ContractNotFoundError",
]

from .config import ChainOptions
from .context import ChainContext, open_context
from .chain.abi import AbiMethod, MethodTable
from .chain.artifacts import ContractArtifact, get_contract, list_contracts, require_contract
from .chain.tx import call, deploy, read
from .exceptions import (
    AbiError,
    ContractNotFoundError,
    MethodNotFoundError,
    NodeStartupError,
    ReviveError,
    RpcConnectionError,
    RpcError,
    SignerUnavailableError,
    TransactionFailedError,
)
from .node import GethNode, launch_geth
from .wallet.signer import LocalSigner, NodeSigner, Signer
