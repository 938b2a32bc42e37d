"""Exception classes for revive-examples."""

from __future__ import annotations

from typing import Any, Optional


class ReviveError(RuntimeError):
    exit_code: int = 1


class RpcError(ReviveError):
    """Raised when the node answers with a JSON-RPC error object."""

    exit_code = 3

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.code = code
        self.data = data


class RpcConnectionError(RpcError):
    """Raised when the endpoint cannot be reached."""


class SignerUnavailableError(ReviveError):
    exit_code = 4


class NodeStartupError(ReviveError):
    exit_code = 5


class TransactionFailedError(ReviveError):
    exit_code = 6

    def __init__(self, message: str, receipt: Optional[dict] = None):
        super().__init__(message)
        self.receipt = receipt


class AbiError(ReviveError, ValueError):
    exit_code = 2


class MethodNotFoundError(AbiError):
    pass


class ContractNotFoundError(ReviveError, KeyError):
    exit_code = 2

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""
