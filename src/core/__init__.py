from .errors import (
    InvalidAddress,
    InvalidFieldCount,
    InvalidHex,
    InvalidNumber,
    InvalidSignature,
    InvalidSignatureComponent,
    KeylessError,
    MalformedRLP,
    MissingField,
)

__all__ = [
    "KeylessError",
    "MissingField",
    "InvalidHex",
    "InvalidNumber",
    "InvalidSignatureComponent",
    "InvalidAddress",
    "MalformedRLP",
    "InvalidFieldCount",
    "InvalidSignature",
]
