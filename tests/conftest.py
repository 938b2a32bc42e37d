"""Shared pytest fixtures: an in-memory JSON-RPC node and a sample registry."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest
from eth_hash.auto import keccak

DEV_ACCOUNT = "0x71562b71999873db5b286df957af199ec94617f7"
# Well-known anvil/hardhat test key #0; never holds real funds
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

# Runtime returns 42 for any call; init code copies it into place
ANSWER_RUNTIME = "602a60005260206000f3"
ANSWER_BYTECODE = "0x600a600c600039600a6000f3" + ANSWER_RUNTIME

FLIPPER_ABI: list[dict[str, Any]] = [
    {"type": "constructor", "inputs": [{"name": "init", "type": "bool"}]},
    {
        "type": "function",
        "name": "get",
        "inputs": [],
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "flip",
        "inputs": [],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "deposit",
        "inputs": [],
        "outputs": [],
        "stateMutability": "payable",
    },
]

ANSWER_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "answer",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "pure",
    },
]


class FakeNode:
    """Minimal Ethereum JSON-RPC node served through httpx.MockTransport."""

    def __init__(self, accounts: Optional[list[str]] = None):
        self.accounts = list(accounts) if accounts is not None else [DEV_ACCOUNT]
        self.chain_id = 1337
        self.nonces: dict[str, int] = {}
        self.code: dict[str, str] = {}
        self.receipts: dict[str, dict] = {}
        self.call_results: dict[str, str] = {}
        self.requests: list[tuple[str, list]] = []
        self.revert_next = False
        self.skip_code = False
        self.receipt_delay = 0
        self._last_estimate: dict[str, Any] = {}
        self._pending_polls: dict[str, int] = {}
        self.transport = httpx.MockTransport(self._handle)

    def methods(self) -> list[str]:
        return [m for m, _ in self.requests]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method, params = body["method"], body.get("params", [])
        self.requests.append((method, params))
        handler = getattr(self, "_" + method, None)
        if handler is None:
            payload = {"code": -32601, "message": f"the method {method} does not exist"}
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "error": payload})
        return httpx.Response(
            200, json={"jsonrpc": "2.0", "id": body["id"], "result": handler(*params)}
        )

    def _mine(self, sender: str, tx: dict[str, Any], tx_hash: str) -> str:
        sender = sender.lower()
        nonce = self.nonces.get(sender, 0)
        self.nonces[sender] = nonce + 1

        receipt: dict[str, Any] = {
            "transactionHash": tx_hash,
            "blockNumber": hex(len(self.receipts) + 1),
            "from": sender,
            "to": tx.get("to"),
            "contractAddress": None,
            "status": "0x0" if self.revert_next else "0x1",
        }
        if not tx.get("to"):
            address = "0x" + keccak(f"{sender}:{nonce}".encode()).hex()[-40:]
            receipt["contractAddress"] = address
            if not self.revert_next and not self.skip_code:
                self.code[address] = "0x" + ANSWER_RUNTIME
        self.revert_next = False
        self.receipts[tx_hash] = receipt
        self._pending_polls[tx_hash] = self.receipt_delay
        return tx_hash

    # ---- RPC methods ----

    def _web3_clientVersion(self) -> str:
        return "Geth/v1.14.0-fake"

    def _eth_chainId(self) -> str:
        return hex(self.chain_id)

    def _eth_accounts(self) -> list[str]:
        return self.accounts

    def _eth_gasPrice(self) -> str:
        return hex(1_000_000_000)

    def _eth_estimateGas(self, tx: dict) -> str:
        self._last_estimate = tx
        return hex(100_000)

    def _eth_getTransactionCount(self, address: str, block: str) -> str:
        return hex(self.nonces.get(address.lower(), 0))

    def _eth_getCode(self, address: str, block: str) -> str:
        return self.code.get(address.lower(), "0x")

    def _eth_call(self, tx: dict, block: str) -> str:
        return self.call_results.get(tx["data"][:10], "0x")

    def _eth_sendTransaction(self, tx: dict) -> str:
        seed = json.dumps({**tx, "seq": len(self.receipts)}, sort_keys=True)
        tx_hash = "0x" + keccak(seed.encode()).hex()
        return self._mine(tx["from"], tx, tx_hash)

    def _eth_sendRawTransaction(self, raw_tx: str) -> str:
        tx_hash = "0x" + keccak(bytes.fromhex(raw_tx[2:])).hex()
        return self._mine(self._last_estimate["from"], self._last_estimate, tx_hash)

    def _eth_getTransactionReceipt(self, tx_hash: str) -> Optional[dict]:
        if self._pending_polls.get(tx_hash, 0) > 0:
            self._pending_polls[tx_hash] -= 1
            return None
        return self.receipts.get(tx_hash)


@pytest.fixture()
def fake_node() -> FakeNode:
    return FakeNode()


@pytest.fixture()
def registry_file(tmp_path: Path) -> Path:
    """Write a pvm-contracts.json style registry and return its path."""
    path = tmp_path / "pvm-contracts.json"
    path.write_text(
        json.dumps(
            {
                "Flipper": {"abi": FLIPPER_ABI, "bytecode": ANSWER_BYTECODE},
                "Answer": {"abi": ANSWER_ABI, "bytecode": ANSWER_BYTECODE},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of the tests."""
    for key in ("PRIVATE_KEY", "REVIVE_RPC_URL", "GETH_BINARY"):
        # setenv first so teardown also removes values loaded from .env
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
