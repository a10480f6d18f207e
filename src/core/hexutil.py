"""Hex and integer normalization helpers."""

from __future__ import annotations

import re

from eth_utils import big_endian_to_int, int_to_big_endian

from .errors import InvalidHex, InvalidNumber

HEX_PATTERN = re.compile(r"^0x[0-9A-Fa-f]*$")

UINT256_MAX = 2**256 - 1


def is_valid_hex(value: object) -> bool:
    """True for strings of the form ``0x`` followed by zero or more hex digits."""
    return isinstance(value, str) and HEX_PATTERN.match(value) is not None


def to_int(value: object, field: str = "value") -> int:
    """Interpret an integer or 0x-hex string as a non-negative integer."""
    if isinstance(value, bool):
        raise InvalidNumber(f"{field} must be an integer, not bool", field)
    if isinstance(value, int):
        if value < 0:
            raise InvalidNumber(f"{field} must be non-negative", field)
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidNumber(f"{field} must be an integer, got {value}", field)
        if value < 0:
            raise InvalidNumber(f"{field} must be non-negative", field)
        return int(value)
    if isinstance(value, str):
        if not is_valid_hex(value):
            raise InvalidHex(f"Invalid hex value for {field}: {value!r}", field)
        digits = value[2:]
        return int(digits, 16) if digits else 0
    raise InvalidNumber(
        f"{field} must be an integer or 0x-prefixed hex string", field
    )


def to_canonical_bytes(value: object, field: str = "value") -> bytes:
    """
    Minimal big-endian encoding of an integer or 0x-hex string.

    Zero encodes as the empty byte string.
    """
    number = to_int(value, field)
    if number == 0:
        return b""
    return int_to_big_endian(number)


def hex_to_bytes(value: object, field: str = "data") -> bytes:
    """Decode a 0x-prefixed hex payload; odd lengths gain a leading nibble."""
    if not is_valid_hex(value):
        raise InvalidHex(f"Invalid hex value for {field}", field)
    digits = value[2:]  # type: ignore[index]
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def bytes_to_int(data: bytes) -> int:
    return big_endian_to_int(data) if data else 0


def to_hex(data: bytes) -> str:
    return f"0x{data.hex()}"


def int_to_hex(value: int) -> str:
    """Minimal hex rendering (``0x1b``), matching JSON-RPC quantities."""
    return hex(value)
