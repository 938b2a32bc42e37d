"""
Private key loading.

A key may be given on the command line; otherwise PRIVATE_KEY is read
from the environment, with a ``.env`` file in the working directory
loaded first if present.

Dependencies: eth-account, python-dotenv
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..config import PRIVATE_KEY_ENV

DEFAULT_ENV_FILE = Path(".env")


def normalize_private_key(private_key: str) -> str:
    """Strip whitespace and ensure the 0x prefix."""
    private_key = private_key.strip()
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key
    return private_key


def load_private_key(
    private_key: Optional[str] = None,
    env_path: Optional[Path] = None,
) -> Optional[str]:
    """
    Resolve the private key to sign with.

    Args:
        private_key: Key passed explicitly (e.g. via --private-key)
        env_path: Path to .env file (default: ./.env)

    Returns:
        0x-prefixed hex private key, or None if no key is configured
    """
    if private_key:
        return normalize_private_key(private_key)

    env_path = env_path or DEFAULT_ENV_FILE
    if env_path.exists():
        load_dotenv(env_path, override=False)

    from_env = os.environ.get(PRIVATE_KEY_ENV)
    if not from_env:
        return None
    return normalize_private_key(from_env)


def get_account(private_key: str) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Raises:
        ValueError: If the key is not a valid secp256k1 private key
    """
    return Account.from_key(normalize_private_key(private_key))
