"""CLI entrypoint for keyless transaction generation and decoding."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

import config
from chain import build_deployment, build_execution, parse_raw_transaction
from core.base_types import DeploymentConfig, TransactionConfig
from core.errors import KeylessError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Keyless (fixed-signature) legacy transaction tool"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    transaction = subparsers.add_parser(
        "transaction", help="Generate a keyless call transaction"
    )
    _add_common_arguments(transaction)
    transaction.add_argument("--to", required=True, help="Checksummed recipient")
    transaction.add_argument("--data", default="0x", help="0x-prefixed calldata")

    deployment = subparsers.add_parser(
        "deployment", help="Generate a keyless contract deployment"
    )
    _add_common_arguments(deployment)
    deployment.add_argument(
        "--bytecode", required=True, help="0x-prefixed contract init code"
    )

    parse = subparsers.add_parser("parse", help="Decode a raw legacy transaction")
    parse.add_argument("raw_tx", help="0x-prefixed raw transaction")

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--gas-limit",
        default=config.default_gas_limit(),
        help="Gas limit (decimal or 0x hex)",
    )
    parser.add_argument(
        "--gas-price",
        default=config.default_gas_price(),
        help="Gas price in wei (decimal or 0x hex)",
    )
    parser.add_argument("--value", default="0", help="Value in wei (decimal or 0x hex)")
    parser.add_argument("--r", default=None, help="Override r (0x hex)")


def _numeric_arg(value: Optional[str]) -> int | str | None:
    """Decimal strings become ints; hex strings pass through for validation."""
    if value is None or value.startswith("0x"):
        return value
    try:
        return int(value)
    except ValueError:
        # Left as a string so normalization reports it as invalid hex.
        return value


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entrypoint for `keyless-tx`."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "transaction":
            result = build_execution(
                TransactionConfig(
                    gas_limit=_numeric_arg(args.gas_limit),
                    gas_price=_numeric_arg(args.gas_price),
                    to=args.to,
                    data=args.data,
                    value=_numeric_arg(args.value),
                    r=args.r,
                )
            )
        elif args.command == "deployment":
            result = build_deployment(
                DeploymentConfig(
                    gas_limit=_numeric_arg(args.gas_limit),
                    gas_price=_numeric_arg(args.gas_price),
                    bytecode=args.bytecode,
                    value=_numeric_arg(args.value),
                    r=args.r,
                )
            )
        else:
            result = parse_raw_transaction(args.raw_tx)
    except KeylessError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(2)

    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
