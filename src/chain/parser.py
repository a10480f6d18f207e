"""Structural decoding of raw legacy transactions."""

from __future__ import annotations

import logging

from core.base_types import Address, ParsedTransaction
from core.errors import InvalidHex
from core.hexutil import hex_to_bytes, int_to_hex, is_valid_hex, to_hex

from .transaction import LegacyTransaction

logger = logging.getLogger(__name__)


def parse_raw_transaction(raw_tx: str) -> ParsedTransaction:
    """
    Decode a 0x-prefixed raw legacy transaction into its fields.

    Accepts both the signed 9-item form and the unsigned 6-item signing
    payload; v/r/s are None for the latter. The signature is not checked
    and no sender is recovered, so transactions carrying arbitrary
    (even unrecoverable) signatures still parse.
    """
    if not is_valid_hex(raw_tx):
        raise InvalidHex("Invalid hex value for rawTransaction", "rawTx")

    tx = LegacyTransaction.deserialize(hex_to_bytes(raw_tx, "rawTx"))
    logger.debug(
        "Parsed %s legacy transaction (%s)",
        "signed" if tx.is_signed else "unsigned",
        "contract creation" if tx.is_contract_creation else "call",
    )

    return ParsedTransaction(
        nonce=tx.nonce,
        gas_price=tx.gas_price,
        gas_limit=tx.gas_limit,
        to=None if tx.to is None else Address.from_bytes(tx.to).checksum,
        value=tx.value,
        data=to_hex(tx.data),
        v=None if tx.v is None else int_to_hex(tx.v),
        r=None if tx.r is None else int_to_hex(tx.r),
        s=None if tx.s is None else int_to_hex(tx.s),
    )
