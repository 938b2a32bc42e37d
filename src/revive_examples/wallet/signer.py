"""
Transaction signers.

Two kinds of signer are supported:

- ``LocalSigner``: signs with an eth-account key and submits the raw
  transaction. Nonce, gas and gas price are fetched from the node.
- ``NodeSigner``: an account the node manages itself (e.g. the unlocked
  developer account of ``geth --dev``); transactions are submitted with
  ``eth_sendTransaction`` and the node fills in the rest.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from eth_account.signers.local import LocalAccount

from ..chain.abi import to_checksum_address
from ..chain.rpc import RpcClient, to_hex
from ..exceptions import SignerUnavailableError
from .keys import get_account


def _rpc_fields(tx: dict[str, Any]) -> dict[str, Any]:
    """Transaction fields in JSON-RPC form (hex quantities)."""
    fields: dict[str, Any] = {"data": tx["data"], "value": to_hex(tx.get("value", 0))}
    if tx.get("to"):
        fields["to"] = tx["to"]
    return fields


class Signer(ABC):
    """Abstract base: an address able to send transactions through ``rpc``."""

    def __init__(self, address: str, rpc: RpcClient):
        self.address = to_checksum_address(address)
        self.rpc = rpc

    async def get_nonce(self) -> int:
        return await self.rpc.get_nonce(self.address)

    @abstractmethod
    async def send_transaction(self, tx: dict[str, Any]) -> str:
        """
        Submit a transaction.

        Args:
            tx: Dict with ``data``, optional ``to`` (omitted for contract
                creation) and optional integer ``value`` in wei

        Returns:
            Transaction hash (0x-prefixed hex)
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address})"


class LocalSigner(Signer):
    def __init__(self, account: LocalAccount, rpc: RpcClient):
        super().__init__(account.address, rpc)
        self.account = account

    @classmethod
    def from_key(cls, private_key: str, rpc: RpcClient) -> "LocalSigner":
        return cls(get_account(private_key), rpc)

    async def send_transaction(self, tx: dict[str, Any]) -> str:
        fields = _rpc_fields(tx)
        gas = tx.get("gas") or await self.rpc.estimate_gas({"from": self.address, **fields})

        unsigned: dict[str, Any] = {
            "data": tx["data"],
            "value": tx.get("value", 0),
            "nonce": await self.get_nonce(),
            "gas": gas,
            "gasPrice": await self.rpc.gas_price(),
            "chainId": await self.rpc.chain_id(),
        }
        if tx.get("to"):
            unsigned["to"] = to_checksum_address(tx["to"])

        signed = self.account.sign_transaction(unsigned)
        raw_tx = "0x" + bytes(signed.raw_transaction).hex()
        return await self.rpc.send_raw_transaction(raw_tx)


class NodeSigner(Signer):
    async def send_transaction(self, tx: dict[str, Any]) -> str:
        fields = {"from": self.address, **_rpc_fields(tx)}
        if tx.get("gas"):
            fields["gas"] = to_hex(tx["gas"])
        return await self.rpc.send_transaction(fields)


async def resolve_signer(rpc: RpcClient, private_key: Optional[str] = None) -> Signer:
    """
    Pick the signer for this session.

    A private key wins; otherwise the first account the node exposes is
    used.

    Raises:
        SignerUnavailableError: If no key is given and the node has no accounts
    """
    if private_key:
        return LocalSigner.from_key(private_key, rpc)

    accounts = await rpc.accounts()
    if not accounts:
        raise SignerUnavailableError(
            f"No private key given and {rpc.url} exposes no accounts. "
            "Pass --private-key or set PRIVATE_KEY."
        )
    return NodeSigner(accounts[0], rpc)
