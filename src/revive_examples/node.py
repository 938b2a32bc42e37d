"""
Local Geth dev node.

Starts ``geth --dev`` as a child process sharing our stdio, makes sure it
is killed when the interpreter exits, and waits until its HTTP endpoint
answers before handing control back.
"""

from __future__ import annotations

import asyncio
import atexit
import subprocess
import time
from typing import Any, Optional, Sequence

import click
import httpx

from .chain.rpc import RpcClient
from .config import GETH_ARGS, LOCAL_RPC_URL, get_geth_binary
from .exceptions import NodeStartupError, RpcConnectionError


class GethNode:
    """A ``geth --dev`` child process."""

    def __init__(
        self,
        binary: Optional[str] = None,
        args: Sequence[str] = GETH_ARGS,
        rpc_url: str = LOCAL_RPC_URL,
    ):
        self.command = [binary or get_geth_binary(), *args]
        self.rpc_url = rpc_url
        self.process: Optional[subprocess.Popen] = None

    @property
    def pid(self) -> Optional[int]:
        return self.process.pid if self.process else None

    def start(self) -> "GethNode":
        if self.process is not None:
            raise NodeStartupError("Geth node already started")
        try:
            self.process = subprocess.Popen(self.command)
        except OSError as exc:
            raise NodeStartupError(f"Cannot start {self.command[0]}: {exc}") from exc
        atexit.register(self.stop)
        return self

    def stop(self) -> None:
        """Kill the child (no graceful shutdown) and reap it."""
        atexit.unregister(self.stop)
        if self.process is None:
            return
        if self.process.poll() is None:
            self.process.kill()
            self.process.wait()

    def __enter__(self) -> "GethNode":
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    async def wait_ready(
        self,
        timeout: float = 30.0,
        poll_interval: float = 0.1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> str:
        """
        Poll the endpoint with ``web3_clientVersion`` until it answers.

        Returns:
            The client version string reported by the node

        Raises:
            NodeStartupError: If the process exits or the node is not ready in time
        """
        deadline = time.monotonic() + timeout
        probe_timeout = max(poll_interval * 10, 1.0)
        async with RpcClient(self.rpc_url, timeout=probe_timeout, transport=transport) as rpc:
            while True:
                if self.process is not None and self.process.poll() is not None:
                    raise NodeStartupError(
                        f"Geth exited with code {self.process.returncode} during startup"
                    )
                try:
                    return await rpc.client_version()
                except RpcConnectionError:
                    pass
                if time.monotonic() >= deadline:
                    raise NodeStartupError(
                        f"Geth did not answer on {self.rpc_url} within {timeout}s"
                    )
                await asyncio.sleep(poll_interval)


async def launch_geth(timeout: float = 30.0) -> GethNode:
    """Start a dev node and wait until it serves JSON-RPC."""
    click.echo("Testing with Geth")
    node = GethNode().start()
    try:
        await node.wait_ready(timeout=timeout)
    except NodeStartupError:
        node.stop()
        raise
    return node
