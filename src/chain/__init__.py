from .parser import parse_raw_transaction
from .recovery import (
    derive_address,
    derive_contract_address,
    recover_public_key,
    recover_sender,
)
from .transaction import LegacyTransaction
from .transaction_builder import (
    KeylessTransactionBuilder,
    build_deployment,
    build_execution,
)

__all__ = [
    "KeylessTransactionBuilder",
    "LegacyTransaction",
    "build_deployment",
    "build_execution",
    "derive_address",
    "derive_contract_address",
    "parse_raw_transaction",
    "recover_public_key",
    "recover_sender",
]
