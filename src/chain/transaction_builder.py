"""Fluent builder for keyless (fixed-signature) legacy transactions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from eth_utils.address import is_checksum_address

from core.base_types import (
    Address,
    DeploymentConfig,
    DeploymentResult,
    ExecutionResult,
    Numeric,
    Signature,
    TransactionConfig,
)
from core.errors import InvalidAddress, InvalidSignatureComponent, MissingField
from core.hexutil import hex_to_bytes, is_valid_hex, to_hex, to_int

from .recovery import derive_contract_address, recover_sender
from .transaction import LegacyTransaction

logger = logging.getLogger(__name__)

EXECUTION_FIELDS = ("gasLimit", "gasPrice", "to", "data", "value")
DEPLOYMENT_FIELDS = ("gasLimit", "gasPrice", "bytecode", "value")

# Every keyless transaction is the first one sent by its (fresh) sender.
KEYLESS_NONCE = 0


@dataclass
class _TxState:
    gas_limit: Optional[Numeric] = None
    gas_price: Optional[Numeric] = None
    to: Optional[str] = None
    data: Optional[str] = None
    value: Optional[Numeric] = None
    r: Optional[str] = None


class KeylessTransactionBuilder:
    """
    Fluent builder for transactions signed with a fixed (v, r, s).

    No private key is involved: the sender address is whatever key the
    fixed signature recovers to, so it has to be funded with
    ``upfront_cost`` before the raw transaction is broadcast. Without
    EIP-155 protection the same raw transaction is valid on every EVM
    chain.

    Usage:
        result = (KeylessTransactionBuilder()
            .gas_limit(100_000)
            .gas_price("0x3b9aca00")
            .to("0x742d35Cc6634C0532925a3b844Bc454e4438f44e")
            .data("0x1234")
            .value(0)
            .build_execution())
    """

    def __init__(self, signature: Optional[Signature] = None):
        self._signature = signature or Signature()
        self._state = _TxState()

    def gas_limit(self, limit: Numeric) -> "KeylessTransactionBuilder":
        self._state.gas_limit = limit
        return self

    def gas_price(self, price: Numeric) -> "KeylessTransactionBuilder":
        self._state.gas_price = price
        return self

    def to(self, address: str) -> "KeylessTransactionBuilder":
        self._state.to = address
        return self

    def data(self, calldata: str) -> "KeylessTransactionBuilder":
        """Calldata for execution, init code for deployment."""
        self._state.data = calldata
        return self

    def bytecode(self, code: str) -> "KeylessTransactionBuilder":
        return self.data(code)

    def value(self, amount: Numeric) -> "KeylessTransactionBuilder":
        self._state.value = amount
        return self

    def r(self, r: Optional[str]) -> "KeylessTransactionBuilder":
        """Override r to pick a different sender (and contract) address."""
        self._state.r = r
        return self

    def build_execution(self) -> ExecutionResult:
        """Validate and return a signed call transaction."""
        state = self._state
        _require(
            EXECUTION_FIELDS,
            gasLimit=state.gas_limit,
            gasPrice=state.gas_price,
            to=state.to,
            data=state.data,
            value=state.value,
        )
        if not is_checksum_address(state.to):
            raise InvalidAddress('Invalid or non-checksummed address provided for "to"')
        signature = self._resolve_signature()

        tx = self._transaction(
            to=Address.from_string(state.to).canonical,
            data=hex_to_bytes(state.data, "data"),
            signature=signature,
        )
        sender = recover_sender(tx)
        logger.debug("Keyless execution sender 0x%s", sender.hex())

        return ExecutionResult(
            raw_tx=to_hex(tx.serialize()),
            sender_address=Address.from_bytes(sender).checksum,
            upfront_cost=tx.upfront_cost,
            r=signature.r,
            s=signature.s,
            v=signature.v,
        )

    def build_deployment(self) -> DeploymentResult:
        """Validate and return a signed contract-creation transaction."""
        state = self._state
        _require(
            DEPLOYMENT_FIELDS,
            gasLimit=state.gas_limit,
            gasPrice=state.gas_price,
            bytecode=state.data,
            value=state.value,
        )
        signature = self._resolve_signature()

        tx = self._transaction(
            to=None,
            data=hex_to_bytes(state.data, "bytecode"),
            signature=signature,
        )
        deployer = recover_sender(tx)
        contract = derive_contract_address(deployer, tx.nonce)
        logger.debug(
            "Keyless deployment from 0x%s creates 0x%s", deployer.hex(), contract.hex()
        )

        return DeploymentResult(
            raw_tx=to_hex(tx.serialize()),
            deployer_address=Address.from_bytes(deployer).checksum,
            contract_address=Address.from_bytes(contract).checksum,
            upfront_cost=tx.upfront_cost,
            r=signature.r,
            s=signature.s,
            v=signature.v,
        )

    def _resolve_signature(self) -> Signature:
        r = self._state.r
        if r is not None and not is_valid_hex(r):
            raise InvalidSignatureComponent("Invalid hex value for customR")
        return self._signature.with_r(r)

    def _transaction(
        self, to: Optional[bytes], data: bytes, signature: Signature
    ) -> LegacyTransaction:
        return LegacyTransaction(
            nonce=KEYLESS_NONCE,
            gas_price=to_int(self._state.gas_price, "gasPrice"),
            gas_limit=to_int(self._state.gas_limit, "gasLimit"),
            to=to,
            value=to_int(self._state.value, "value"),
            data=data,
            v=signature.v_int,
            r=signature.r_int,
            s=signature.s_int,
        )


def _require(names: tuple, **values: Any) -> None:
    if any(values[name] is None for name in names):
        raise MissingField(names)


def build_execution(
    config: Union[TransactionConfig, Mapping[str, Any]],
) -> ExecutionResult:
    """Signed call transaction, its sender address and upfront cost."""
    if not isinstance(config, TransactionConfig):
        config = TransactionConfig.from_dict(config)
    return (
        KeylessTransactionBuilder()
        .gas_limit(config.gas_limit)
        .gas_price(config.gas_price)
        .to(config.to)
        .data(config.data)
        .value(config.value)
        .r(config.r)
        .build_execution()
    )


def build_deployment(
    config: Union[DeploymentConfig, Mapping[str, Any]],
) -> DeploymentResult:
    """Signed deployment transaction, deployer/contract addresses and upfront cost."""
    if not isinstance(config, DeploymentConfig):
        config = DeploymentConfig.from_dict(config)
    return (
        KeylessTransactionBuilder()
        .gas_limit(config.gas_limit)
        .gas_price(config.gas_price)
        .bytecode(config.bytecode)
        .value(config.value)
        .r(config.r)
        .build_deployment()
    )
