"""
Contract registry loader.

The registry is a flat JSON mapping produced by the compiler toolchain::

    {"Flipper": {"abi": [...], "bytecode": "0x..."}, ...}

``evm-contracts.json`` holds solc output (used with Geth),
``pvm-contracts.json`` holds the PolkaVM build of the same contracts.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from ..config import PVM_CONTRACTS_FILE
from ..exceptions import ContractNotFoundError

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ContractArtifact:
    abi: list[dict[str, Any]]
    bytecode: str


def load_registry(path: Optional[PathLike] = None) -> dict[str, ContractArtifact]:
    """
    Load a contract registry file.

    Args:
        path: Registry file (default: pvm-contracts.json in the working
              directory). Pass ``ChainOptions.contracts_file`` to follow
              the selected network.

    Raises:
        FileNotFoundError: If the registry file does not exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    with Path(path or PVM_CONTRACTS_FILE).open("r", encoding="utf-8") as f:
        raw = json.load(f)

    return {
        name: ContractArtifact(abi=entry["abi"], bytecode=entry["bytecode"])
        for name, entry in raw.items()
    }


def get_contract(name: str, path: Optional[PathLike] = None) -> Optional[ContractArtifact]:
    """
    Get one of the pre-built contracts.

    Returns None when the registry has no entry for ``name``; use
    :func:`require_contract` to fail instead.
    """
    return load_registry(path).get(name)


def require_contract(name: str, path: Optional[PathLike] = None) -> ContractArtifact:
    """Like :func:`get_contract`, but raises ContractNotFoundError on a miss."""
    registry = load_registry(path)
    if name not in registry:
        available = ", ".join(sorted(registry)) or "none"
        source = path or PVM_CONTRACTS_FILE
        raise ContractNotFoundError(
            f"Contract '{name}' not found in {source} (available: {available})"
        )
    return registry[name]


def list_contracts(path: Optional[PathLike] = None) -> list[str]:
    return sorted(load_registry(path))
