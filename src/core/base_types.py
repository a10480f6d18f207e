"""Core type definitions for keyless transaction modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from eth_utils.address import is_address, to_canonical_address, to_checksum_address

Numeric = Union[int, str]

# Recovery indicator without a chain id (EIP-155 unprotected).
DEFAULT_V = "0x1b"

# Dummy signature values; nobody holds a key for the recovered address.
DEFAULT_R = "0x" + "12" * 32
DEFAULT_S = "0x" + "12" * 32


@dataclass(frozen=True)
class Address:
    """Ethereum address with validation and checksumming."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError("Address value must be a string")
        if not is_address(self.value):
            raise ValueError("Invalid Ethereum address")
        object.__setattr__(self, "value", to_checksum_address(self.value))

    @classmethod
    def from_string(cls, s: str) -> "Address":
        return cls(s)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Address":
        if len(raw) != 20:
            raise ValueError(f"Address must be 20 bytes, got {len(raw)}")
        return cls(to_checksum_address(raw))

    @property
    def checksum(self) -> str:
        return self.value

    @property
    def lower(self) -> str:
        return self.value.lower()

    @property
    def canonical(self) -> bytes:
        """Raw 20-byte form used on the wire."""
        return to_canonical_address(self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Address):
            return self.lower == other.lower
        if isinstance(other, str):
            return self.lower == other.lower()
        return False

    def __hash__(self) -> int:
        return hash(self.lower)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Signature:
    """
    Fixed (v, r, s) triple.

    Values are kept as the hex strings the caller supplied so they can be
    echoed back unchanged; ``*_int`` properties give the numeric form.
    """

    v: str = DEFAULT_V
    r: str = DEFAULT_R
    s: str = DEFAULT_S

    @property
    def v_int(self) -> int:
        return _hex_int(self.v)

    @property
    def r_int(self) -> int:
        return _hex_int(self.r)

    @property
    def s_int(self) -> int:
        return _hex_int(self.s)

    def with_r(self, r: Optional[str]) -> "Signature":
        if r is None:
            return self
        return Signature(v=self.v, r=r, s=self.s)


def _hex_int(value: str) -> int:
    digits = value[2:] if value.startswith("0x") else value
    return int(digits, 16) if digits else 0


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


@dataclass(frozen=True)
class TransactionConfig:
    """Inputs for a keyless call transaction."""

    gas_limit: Optional[Numeric] = None
    gas_price: Optional[Numeric] = None
    to: Optional[str] = None
    data: Optional[str] = None
    value: Optional[Numeric] = None
    r: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TransactionConfig":
        """Accept camelCase (``gasLimit``) or snake_case (``gas_limit``) keys."""
        return cls(
            gas_limit=_pick(data, "gasLimit", "gas_limit"),
            gas_price=_pick(data, "gasPrice", "gas_price"),
            to=data.get("to"),
            data=data.get("data"),
            value=data.get("value"),
            r=data.get("r"),
        )


@dataclass(frozen=True)
class DeploymentConfig:
    """Inputs for a keyless contract-creation transaction."""

    gas_limit: Optional[Numeric] = None
    gas_price: Optional[Numeric] = None
    bytecode: Optional[str] = None
    value: Optional[Numeric] = None
    r: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeploymentConfig":
        return cls(
            gas_limit=_pick(data, "gasLimit", "gas_limit"),
            gas_price=_pick(data, "gasPrice", "gas_price"),
            bytecode=data.get("bytecode"),
            value=data.get("value"),
            r=data.get("r"),
        )


@dataclass(frozen=True)
class ExecutionResult:
    """Signed call transaction and the address that must be funded."""

    raw_tx: str
    sender_address: str
    upfront_cost: int
    r: str
    s: str
    v: str

    def to_dict(self) -> dict:
        return {
            "rawTx": self.raw_tx,
            "senderAddress": self.sender_address,
            "upfrontCost": self.upfront_cost,
            "r": self.r,
            "s": self.s,
            "v": self.v,
        }


@dataclass(frozen=True)
class DeploymentResult:
    """Signed deployment transaction with deployer and contract addresses."""

    raw_tx: str
    deployer_address: str
    contract_address: str
    upfront_cost: int
    r: str
    s: str
    v: str

    def to_dict(self) -> dict:
        return {
            "rawTx": self.raw_tx,
            "deployerAddress": self.deployer_address,
            "contractAddress": self.contract_address,
            "upfrontCost": self.upfront_cost,
            "r": self.r,
            "s": self.s,
            "v": self.v,
        }


@dataclass(frozen=True)
class ParsedTransaction:
    """Fields decoded from a raw legacy transaction."""

    nonce: int
    gas_price: int
    gas_limit: int
    to: Optional[str]
    value: int
    data: str
    v: Optional[str] = None
    r: Optional[str] = None
    s: Optional[str] = None

    @property
    def is_contract_creation(self) -> bool:
        return self.to is None

    @property
    def is_signed(self) -> bool:
        return self.v is not None

    def to_dict(self) -> dict:
        return {
            "nonce": self.nonce,
            "gasPrice": self.gas_price,
            "gasLimit": self.gas_limit,
            "to": self.to,
            "value": self.value,
            "data": self.data,
            "v": self.v,
            "r": self.r,
            "s": self.s,
        }
