"""Legacy (pre-typed) transaction model and its RLP serialization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from eth_utils.crypto import keccak

from core import rlp
from core.errors import InvalidAddress, InvalidNumber, MalformedRLP
from core.hexutil import UINT256_MAX, bytes_to_int

UNSIGNED_FIELD_COUNT = 6
SIGNED_FIELD_COUNT = 9

_NUMERIC_FIELDS = ("nonce", "gas_price", "gas_limit", "value")


def _int_bytes(value: int) -> bytes:
    if value == 0:
        return b""
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


@dataclass(frozen=True)
class LegacyTransaction:
    """
    Transaction stored as:
    [nonce, gasPrice, gasLimit, to, value, data, v, r, s]

    ``to`` is None for contract creation and serializes as the empty
    string. Integers serialize in minimal big-endian form, so 0 is the
    empty string. A transaction without v/r/s serializes as the 6-item
    signing payload.
    """

    nonce: int
    gas_price: int
    gas_limit: int
    to: Optional[bytes]
    value: int
    data: bytes
    v: Optional[int] = None
    r: Optional[int] = None
    s: Optional[int] = None

    def __post_init__(self) -> None:
        for name in _NUMERIC_FIELDS:
            number = getattr(self, name)
            if not isinstance(number, int) or number < 0:
                raise InvalidNumber(f"{name} must be a non-negative integer", name)
            if number > UINT256_MAX:
                raise InvalidNumber(f"{name} exceeds 2^256 - 1", name)
        if self.to is not None and len(self.to) != 20:
            raise InvalidAddress(f"to must be 20 bytes, got {len(self.to)}")
        signature = (self.v, self.r, self.s)
        if any(part is None for part in signature) and any(
            part is not None for part in signature
        ):
            raise ValueError("v, r and s must be given together")

    @property
    def is_signed(self) -> bool:
        return self.v is not None

    @property
    def is_contract_creation(self) -> bool:
        return self.to is None

    @property
    def upfront_cost(self) -> int:
        """Balance the sender needs before broadcast: value + gas budget."""
        return self.value + self.gas_limit * self.gas_price

    def signing_payload(self) -> List[bytes]:
        return [
            _int_bytes(self.nonce),
            _int_bytes(self.gas_price),
            _int_bytes(self.gas_limit),
            self.to or b"",
            _int_bytes(self.value),
            self.data,
        ]

    def signing_hash(self) -> bytes:
        """keccak256 of the unsigned 6-field RLP list."""
        return keccak(rlp.encode(self.signing_payload()))

    def serialize(self) -> bytes:
        fields = self.signing_payload()
        if self.is_signed:
            fields += [_int_bytes(self.v), _int_bytes(self.r), _int_bytes(self.s)]
        return rlp.encode(fields)

    def hash(self) -> bytes:
        """Transaction hash as reported by nodes after broadcast."""
        return keccak(self.serialize())

    @classmethod
    def deserialize(cls, raw: bytes) -> "LegacyTransaction":
        """
        Decode a 6-item (unsigned) or 9-item (signed) legacy transaction.

        Empty v/r/s on a 9-item list are read as "not signed".
        """
        items = rlp.decode_list(raw, arity=(UNSIGNED_FIELD_COUNT, SIGNED_FIELD_COUNT))
        for index, item in enumerate(items):
            if not isinstance(item, bytes):
                raise MalformedRLP(f"Transaction field {index} must be a byte string")

        nonce, gas_price, gas_limit, to, value, data = items[:UNSIGNED_FIELD_COUNT]
        for name, item in (
            ("nonce", nonce),
            ("gasPrice", gas_price),
            ("gasLimit", gas_limit),
            ("value", value),
        ):
            _reject_leading_zeros(name, item)

        if to and len(to) != 20:
            raise InvalidAddress(f"Invalid address length: {len(to)} bytes")

        v = r = s = None
        if len(items) == SIGNED_FIELD_COUNT:
            v_raw, r_raw, s_raw = items[UNSIGNED_FIELD_COUNT:]
            for name, item in (("v", v_raw), ("r", r_raw), ("s", s_raw)):
                _reject_leading_zeros(name, item)
            present = [bool(part) for part in (v_raw, r_raw, s_raw)]
            if any(present) and not all(present):
                raise MalformedRLP("v, r and s must be all empty or all present")
            if all(present):
                v, r, s = bytes_to_int(v_raw), bytes_to_int(r_raw), bytes_to_int(s_raw)

        return cls(
            nonce=bytes_to_int(nonce),
            gas_price=bytes_to_int(gas_price),
            gas_limit=bytes_to_int(gas_limit),
            to=to or None,
            value=bytes_to_int(value),
            data=data,
            v=v,
            r=r,
            s=s,
        )


def _reject_leading_zeros(name: str, item: bytes) -> None:
    if len(item) > 0 and item[0] == 0:
        raise MalformedRLP(f"{name} cannot have leading zeros")
