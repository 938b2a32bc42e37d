"""
Async JSON-RPC client.

Lightweight alternative to web3.py: uses httpx for HTTP. Supports the
handful of ``eth_*`` methods needed to deploy and call contracts and to
poll for transaction receipts.
"""

from __future__ import annotations

import asyncio
import itertools
import time
from typing import Any, Optional

import httpx

from ..exceptions import RpcConnectionError, RpcError


class RpcClient:
    """JSON-RPC 2.0 client bound to a single endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self._ids = itertools.count(1)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "RpcClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, params: Optional[list] = None) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            RpcConnectionError: If the endpoint cannot be reached
            RpcError: If the node returns an error object
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": next(self._ids),
        }

        try:
            response = await self._client.post(self.url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise RpcConnectionError(f"{method} failed against {self.url}: {exc}") from exc
        except ValueError as exc:
            raise RpcConnectionError(
                f"{method} got a non-JSON response from {self.url}: {exc}"
            ) from exc

        if not isinstance(data, dict):
            raise RpcConnectionError(f"{method} got a malformed response from {self.url}")

        if "error" in data:
            error = data["error"] or {}
            if not isinstance(error, dict):
                error = {"message": str(error)}
            raise RpcError(
                f"RPC error: {error.get('message', error)}",
                code=error.get("code"),
                data=error.get("data"),
            )

        return data.get("result")

    # ---- Typed helpers ----

    async def client_version(self) -> str:
        return await self.request("web3_clientVersion")

    async def chain_id(self) -> int:
        return int(await self.request("eth_chainId"), 16)

    async def accounts(self) -> list[str]:
        return await self.request("eth_accounts") or []

    async def get_nonce(self, address: str, block: str = "pending") -> int:
        result = await self.request("eth_getTransactionCount", [address, block])
        return int(result, 16)

    async def get_balance(self, address: str) -> int:
        return int(await self.request("eth_getBalance", [address, "latest"]), 16)

    async def gas_price(self) -> int:
        return int(await self.request("eth_gasPrice"), 16)

    async def estimate_gas(self, tx: dict) -> int:
        return int(await self.request("eth_estimateGas", [tx]), 16)

    async def get_code(self, address: str) -> str:
        return await self.request("eth_getCode", [address, "latest"])

    async def eth_call(self, tx: dict) -> str:
        return await self.request("eth_call", [tx, "latest"])

    async def send_raw_transaction(self, raw_tx: str) -> str:
        return await self.request("eth_sendRawTransaction", [raw_tx])

    async def send_transaction(self, tx: dict) -> str:
        return await self.request("eth_sendTransaction", [tx])

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[dict]:
        return await self.request("eth_getTransactionReceipt", [tx_hash])

    async def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: Optional[float] = None,
        poll_interval: float = 1.0,
    ) -> dict:
        """
        Wait for a transaction receipt.

        Args:
            tx_hash: Transaction hash
            timeout: Maximum wait time in seconds (None waits forever)
            poll_interval: Polling interval in seconds

        Returns:
            Transaction receipt dict

        Raises:
            TimeoutError: If receipt not found within timeout
        """
        start = time.monotonic()
        while True:
            receipt = await self.get_transaction_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if timeout is not None and time.monotonic() - start >= timeout:
                raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout}s")
            await asyncio.sleep(poll_interval)


def to_hex(value: int) -> str:
    """Encode an integer as a JSON-RPC quantity."""
    return hex(value)
