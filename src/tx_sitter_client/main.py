#!/usr/bin/env python3
"""Command line entry point for the tx-sitter client.

Relays a transaction, looks transactions up, or sends a raw JSON-RPC request
through a relayer. Function identifiers come from the environment (a ``.env``
file in the working directory is loaded first).
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv


# Configure logging before any other imports create loggers
def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_level: int = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


# Get logger for this module
logger = logging.getLogger(__name__)

from .client import TxSitterClient  # noqa: E402
from .config import TxSitterConfig  # noqa: E402
from .errors import TxSitterError  # noqa: E402
from .models import (  # noqa: E402
    TransactionInput,
    TransactionPriority,
    TransactionStatus,
    TransactionType,
)


def json_params(value: str) -> Any:
    """Parse the JSON encoded params of the rpc subcommand."""
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"params must be valid JSON: {e}") from None


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="tx-sitter",
        description="TxSitter client - relay and inspect transactions via the tx-sitter functions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Environment Variables:
  TX_SITTER_SEND_LAMBDA          - Name or ARN of the send function
  TX_SITTER_RPC_LAMBDA           - Name or ARN of the rpc function
  TX_SITTER_TRANSACTIONS_LAMBDA  - Name or ARN of the transactions function
  AWS_REGION                     - AWS region of the functions (optional)
  TX_SITTER_INVOKE_URL           - Local invoke endpoint instead of AWS (optional)
  LOG_LEVEL                      - Logging level (can be overridden with --log-level)
        """
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: INFO)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    relay = subparsers.add_parser("relay", help="Relay a new transaction")
    relay.add_argument("--to", required=True, help="Destination address")
    relay.add_argument("--value", default="0", help="Value in wei (decimal string)")
    relay.add_argument("--gas-limit", required=True, help="Gas limit (decimal string)")
    relay.add_argument("--relayer-id", required=True, help="Relayer sending the transaction")
    relay.add_argument("--data", default="", help="Hex encoded calldata")
    relay.add_argument("--transaction-id", default=None, help="Idempotency key")
    relay.add_argument(
        "--priority",
        default=None,
        choices=[p.value for p in TransactionPriority],
        help="Fee priority"
    )
    relay.add_argument(
        "--transaction-type",
        default=None,
        choices=[t.value for t in TransactionType],
        help="Domain kind of the transaction"
    )

    get = subparsers.add_parser("get", help="Show a transaction by id")
    get.add_argument("transaction_id", help="Transaction id returned by relay")

    list_cmd = subparsers.add_parser("list", help="List transactions of a relayer")
    list_cmd.add_argument("relayer_id", help="Relayer id")
    list_cmd.add_argument(
        "--status",
        default=TransactionStatus.QUEUED.value,
        choices=[s.value for s in TransactionStatus],
        help="Transaction status to filter on (default: queued)"
    )

    rpc = subparsers.add_parser("rpc", help="Send a JSON-RPC request through a relayer")
    rpc.add_argument("relayer_id", help="Relayer id")
    rpc.add_argument("method", help="JSON-RPC method, e.g. eth_blockNumber")
    rpc.add_argument(
        "params", nargs="?", default="[]", type=json_params,
        help="JSON encoded params (default: [])"
    )

    return parser


async def run_command(client: TxSitterClient, args: argparse.Namespace) -> Any:
    """Run the selected subcommand and return a JSON-compatible result."""
    match args.command:
        case "relay":
            transaction = TransactionInput(
                to=args.to,
                value=args.value,
                gas_limit=args.gas_limit,
                relayer_id=args.relayer_id,
                data=args.data,
                transaction_id=args.transaction_id,
                priority=TransactionPriority(args.priority) if args.priority else None,
                transaction_type=(
                    TransactionType(args.transaction_type) if args.transaction_type else None
                ),
            )
            return await client.relay_transaction(transaction)
        case "get":
            record = await client.get_transaction_by_id(args.transaction_id)
            return record.to_dict()
        case "list":
            transactions = await client.get_transaction_by_relayer_and_status(
                args.relayer_id, TransactionStatus(args.status)
            )
            return [tx.to_dict() for tx in transactions]
        case "rpc":
            return await client.get_provider(args.relayer_id).request(args.method, args.params)
        case _:
            raise ValueError(f"Unknown command: {args.command}")


async def main(argv: list[str] | None = None) -> None:
    """Main entry point for the tx-sitter command line.

    Raises:
        SystemExit: On configuration or operation errors
    """
    load_dotenv()
    args: argparse.Namespace = build_parser().parse_args(argv)

    setup_logging(args.log_level)

    try:
        config: TxSitterConfig = TxSitterConfig.from_env()
        config.log_config()
        client: TxSitterClient = TxSitterClient(config)
        result = await run_command(client, args)

    except ValueError as e:
        logger.error(f"Configuration Error: {e}")
        logger.error("Please check your environment variables:")
        logger.error("  - TX_SITTER_SEND_LAMBDA: Name or ARN of the send function")
        logger.error("  - TX_SITTER_RPC_LAMBDA: Name or ARN of the rpc function")
        logger.error("  - TX_SITTER_TRANSACTIONS_LAMBDA: Name or ARN of the transactions function")
        sys.exit(1)

    except TxSitterError as e:
        logger.error(f"{args.command} failed: {type(e).__name__}: {e}")
        sys.exit(1)

    except KeyboardInterrupt:
        logger.info("\nReceived interrupt signal, shutting down...")
        sys.exit(0)

    except Exception as e:
        logger.error(f"Fatal Error: {e}", exc_info=True)
        sys.exit(1)

    print(result if isinstance(result, str) else json.dumps(result, indent=2))


def run() -> None:
    """Console script wrapper around the async entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
