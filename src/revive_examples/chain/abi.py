"""
ABI method tables.

A contract ABI is turned into a validated table of methods up front, so a
call by name either resolves to a concrete function entry or fails before
anything is sent to the node.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from eth_abi import decode, encode
from eth_hash.auto import keccak

from ..exceptions import AbiError, MethodNotFoundError

READ_ONLY_MUTABILITY = frozenset({"view", "pure"})


def keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format."""
    addr = address.lower().replace("0x", "")
    if len(addr) != 40:
        raise ValueError(f"Invalid address: {address}")
    addr_hash = keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


def canonical_type(param: dict[str, Any]) -> str:
    """Canonical type string of an ABI parameter, expanding tuples."""
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(canonical_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


def _strip_0x(data: str) -> str:
    return data[2:] if data.startswith("0x") else data


@dataclass(frozen=True)
class AbiMethod:
    """A single ``function`` entry of an ABI."""

    name: str
    input_types: tuple[str, ...]
    output_types: tuple[str, ...]
    state_mutability: str

    @classmethod
    def from_entry(cls, entry: dict[str, Any]) -> "AbiMethod":
        mutability = entry.get("stateMutability")
        if mutability is None:
            # pre-0.5 solc output
            if entry.get("constant"):
                mutability = "view"
            else:
                mutability = "payable" if entry.get("payable") else "nonpayable"
        return cls(
            name=entry["name"],
            input_types=tuple(canonical_type(p) for p in entry.get("inputs", [])),
            output_types=tuple(canonical_type(p) for p in entry.get("outputs", [])),
            state_mutability=mutability,
        )

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return keccak256(self.signature.encode("utf-8"))[:4]

    @property
    def is_read_only(self) -> bool:
        return self.state_mutability in READ_ONLY_MUTABILITY

    @property
    def is_payable(self) -> bool:
        return self.state_mutability == "payable"

    def encode_call(self, args: Sequence[Any]) -> str:
        """ABI-encode a call to 0x-prefixed hex calldata."""
        if len(args) != len(self.input_types):
            raise AbiError(
                f"{self.signature} expects {len(self.input_types)} argument(s), "
                f"got {len(args)}"
            )
        encoded_args = encode(list(self.input_types), list(args)) if args else b""
        return "0x" + self.selector.hex() + encoded_args.hex()

    def decode_result(self, data: Optional[str]) -> Any:
        """
        ABI-decode a call result.

        Returns:
            None for methods without outputs, the single value for one
            output, otherwise a tuple
        """
        if not self.output_types or data is None or data == "0x":
            return None
        decoded = decode(list(self.output_types), bytes.fromhex(_strip_0x(data)))
        if len(decoded) == 1:
            return decoded[0]
        return decoded


class MethodTable:
    """Functions of a contract ABI, indexed by name."""

    def __init__(self, abi: Iterable[dict[str, Any]]):
        self.abi = list(abi)
        self._methods: dict[str, list[AbiMethod]] = {}
        self._constructor_types: tuple[str, ...] = ()

        for entry in self.abi:
            entry_type = entry.get("type", "function")
            if entry_type == "function":
                method = AbiMethod.from_entry(entry)
                self._methods.setdefault(method.name, []).append(method)
            elif entry_type == "constructor":
                self._constructor_types = tuple(
                    canonical_type(p) for p in entry.get("inputs", [])
                )

    def __contains__(self, name: str) -> bool:
        return name in self._methods

    def names(self) -> list[str]:
        return sorted(self._methods)

    def resolve(self, name: str, args: Sequence[Any] = ()) -> AbiMethod:
        """
        Look up a method by name.

        Overloaded names are resolved by argument count.

        Raises:
            MethodNotFoundError: If the ABI has no function with this name
            AbiError: If an overload cannot be picked unambiguously
        """
        candidates = self._methods.get(name)
        if not candidates:
            available = ", ".join(self.names()) or "none"
            raise MethodNotFoundError(
                f"Method '{name}' not found in ABI (available: {available})"
            )
        if len(candidates) == 1:
            return candidates[0]

        matching = [m for m in candidates if len(m.input_types) == len(args)]
        if len(matching) != 1:
            signatures = ", ".join(m.signature for m in candidates)
            raise AbiError(
                f"Cannot pick an overload of '{name}' for {len(args)} argument(s): "
                f"{signatures}"
            )
        return matching[0]

    def encode_deploy(self, bytecode: str, args: Sequence[Any] = ()) -> str:
        """Append ABI-encoded constructor arguments to the creation bytecode."""
        if len(args) != len(self._constructor_types):
            raise AbiError(
                f"Constructor expects {len(self._constructor_types)} argument(s), "
                f"got {len(args)}"
            )
        deploy_data = _strip_0x(bytecode)
        if args:
            deploy_data += encode(list(self._constructor_types), list(args)).hex()
        return "0x" + deploy_data
