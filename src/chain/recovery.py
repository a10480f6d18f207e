"""secp256k1 public-key recovery and account/contract address derivation."""

from __future__ import annotations

import logging

from eth_keys import keys
from eth_keys.exceptions import BadSignature
from eth_keys.exceptions import ValidationError as KeyValidationError
from eth_utils.crypto import keccak

from core import rlp
from core.errors import InvalidSignature
from core.hexutil import to_canonical_bytes

from .transaction import LegacyTransaction

logger = logging.getLogger(__name__)

# Order of the secp256k1 base point.
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

LEGACY_V_OFFSET = 27


def recover_public_key(msg_hash: bytes, v: int, r: int, s: int) -> bytes:
    """
    Recover the 64-byte uncompressed public key (x || y) that produced
    the signature (v, r, s) over ``msg_hash``.

    ``v`` is the legacy recovery indicator, 27 or 28. No low-s rule is
    applied: fixed dummy signatures are expected here.
    """
    if len(msg_hash) != 32:
        raise InvalidSignature(f"Message hash must be 32 bytes, got {len(msg_hash)}")
    if v not in (LEGACY_V_OFFSET, LEGACY_V_OFFSET + 1):
        raise InvalidSignature(f"v must be 27 or 28, got {v}")
    if not 0 < r < SECP256K1_N:
        raise InvalidSignature("r must be in the range [1, secp256k1n)")
    if not 0 < s < SECP256K1_N:
        raise InvalidSignature("s must be in the range [1, secp256k1n)")

    try:
        signature = keys.Signature(vrs=(v - LEGACY_V_OFFSET, r, s))
        public_key = signature.recover_public_key_from_msg_hash(msg_hash)
    except (BadSignature, KeyValidationError) as exc:
        raise InvalidSignature(f"Public key recovery failed: {exc}") from exc
    return public_key.to_bytes()


def derive_address(public_key: bytes) -> bytes:
    """Account address: last 20 bytes of keccak256(x || y)."""
    if len(public_key) != 64:
        raise ValueError(f"Public key must be 64 bytes, got {len(public_key)}")
    return keccak(public_key)[-20:]


def derive_contract_address(sender: bytes, nonce: int) -> bytes:
    """CREATE address: last 20 bytes of keccak256(rlp([sender, nonce]))."""
    if len(sender) != 20:
        raise ValueError(f"Sender address must be 20 bytes, got {len(sender)}")
    if nonce < 0:
        raise ValueError("nonce must be non-negative")
    return keccak(rlp.encode([sender, to_canonical_bytes(nonce, "nonce")]))[-20:]


def recover_sender(tx: LegacyTransaction) -> bytes:
    """Address implied by the signature of a signed legacy transaction."""
    if not tx.is_signed:
        raise InvalidSignature("Transaction is not signed")
    public_key = recover_public_key(tx.signing_hash(), tx.v, tx.r, tx.s)
    sender = derive_address(public_key)
    logger.debug("Recovered sender 0x%s", sender.hex())
    return sender
