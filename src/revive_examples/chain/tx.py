"""
Deploy and call contracts through a ChainContext.

All gas is paid by the context's signer. Receipts are the raw dicts
returned by ``eth_getTransactionReceipt``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence

import click

from ..exceptions import AbiError, TransactionFailedError
from .abi import MethodTable, to_checksum_address

if TYPE_CHECKING:
    from ..context import ChainContext


def _receipt_status(receipt: dict) -> int:
    return int(receipt.get("status") or "0x0", 16)


async def deploy(
    ctx: "ChainContext",
    bytecode: str,
    abi: list,
    args: Sequence[Any] = (),
    timeout: Optional[float] = None,
) -> str:
    """
    Deploy a contract.

    Builds a creation transaction (no ``to``), sends it through the
    context's signer and waits for the receipt.

    Args:
        ctx: Connected chain context
        bytecode: Hex-encoded creation bytecode
        abi: Contract ABI (used to encode constructor arguments)
        args: Constructor arguments
        timeout: Receipt wait timeout (None waits forever)

    Returns:
        Checksummed address of the deployed contract

    Raises:
        TransactionFailedError: If the deployment reverted or left no code
    """
    click.echo(f"Deploying contract with {list(args)}")
    deploy_data = MethodTable(abi).encode_deploy(bytecode, args)

    tx_hash = await ctx.signer.send_transaction({"data": deploy_data})
    receipt = await ctx.rpc.wait_for_receipt(tx_hash, timeout=timeout)

    contract_address = receipt.get("contractAddress")
    if _receipt_status(receipt) != 1 or not contract_address:
        raise TransactionFailedError(f"Deployment {tx_hash} failed", receipt=receipt)

    code = await ctx.rpc.get_code(contract_address)
    if not code or code == "0x":
        raise TransactionFailedError(
            f"No code at {contract_address} after deployment {tx_hash}", receipt=receipt
        )

    address = to_checksum_address(contract_address)
    click.echo(f"Contract deployed: {address}")
    return address


async def read(
    ctx: "ChainContext",
    method: str,
    address: str,
    abi: list,
    args: Sequence[Any] = (),
) -> Any:
    """
    Call a read-only method with ``eth_call``.

    Returns:
        Decoded return value(s)
    """
    func = MethodTable(abi).resolve(method, args)
    calldata = func.encode_call(args)
    result = await ctx.rpc.eth_call(
        {"from": ctx.signer.address, "to": address, "data": calldata}
    )
    return func.decode_result(result)


async def call(
    ctx: "ChainContext",
    method: str,
    address: str,
    abi: list,
    args: Sequence[Any] = (),
    value: Optional[int] = None,
    timeout: Optional[float] = None,
) -> Optional[dict]:
    """
    Call a contract method.

    ``view`` / ``pure`` methods are executed with ``eth_call``: the
    decoded result is printed and no receipt exists, so None is returned.
    Every other method is sent as a transaction and its receipt returned.

    Args:
        ctx: Connected chain context
        method: Function name, resolved against the ABI
        address: Contract address
        abi: Contract ABI
        args: Call arguments
        value: Wei to attach (state-changing methods only)
        timeout: Receipt wait timeout (None waits forever)

    Raises:
        MethodNotFoundError: If the ABI has no such function
        TransactionFailedError: If the transaction reverted
    """
    opts = {"value": value} if value is not None else {}
    click.echo(f"Calling {method} at {address} with {list(args)} {opts}")

    func = MethodTable(abi).resolve(method, args)
    calldata = func.encode_call(args)

    if func.is_read_only:
        if value:
            raise AbiError(f"Cannot send value to {func.state_mutability} method {func.signature}")
        result = await ctx.rpc.eth_call(
            {"from": ctx.signer.address, "to": address, "data": calldata}
        )
        click.echo(f"Call result: {func.decode_result(result)!r}")
        return None

    if value and not func.is_payable:
        raise AbiError(f"Cannot send value to non-payable method {func.signature}")

    tx_hash = await ctx.signer.send_transaction(
        {"to": address, "data": calldata, "value": value or 0}
    )
    click.echo(f"Call transaction hash: {tx_hash}")

    receipt = await ctx.rpc.wait_for_receipt(tx_hash, timeout=timeout)
    if _receipt_status(receipt) != 1:
        raise TransactionFailedError(f"Transaction {tx_hash} reverted", receipt=receipt)
    return receipt
