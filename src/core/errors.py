"""Validation and decoding exceptions for keyless transaction handling."""

from __future__ import annotations

from typing import Optional, Sequence


class KeylessError(ValueError):
    """Base class for keyless transaction errors."""


class MissingField(KeylessError):
    """A required config field is absent."""

    def __init__(self, fields: Sequence[str]):
        self.fields = tuple(fields)
        super().__init__(f"All parameters ({', '.join(self.fields)}) are required")


class InvalidHex(KeylessError):
    """A value expected to be a 0x-prefixed hex string is not."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class InvalidNumber(KeylessError):
    """A numeric input is fractional, negative or out of range."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class InvalidSignatureComponent(KeylessError):
    """Override r value failed hex validation."""


class InvalidAddress(KeylessError):
    """Address is malformed or not checksummed."""


class MalformedRLP(KeylessError):
    """RLP payload is truncated, non-canonical or has trailing bytes."""


class InvalidFieldCount(MalformedRLP):
    """Decoded transaction list has an unexpected number of items."""

    def __init__(self, count: int, expected: Sequence[int]):
        self.count = count
        self.expected = tuple(expected)
        allowed = " or ".join(str(n) for n in self.expected)
        super().__init__(
            f"Invalid transaction. Only expecting {allowed} values, got {count}"
        )


class InvalidSignature(KeylessError):
    """Public key could not be recovered from (v, r, s)."""
