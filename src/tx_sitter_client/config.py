#!/usr/bin/env python3
"""Configuration management for the tx-sitter client.

This module provides the immutable configuration shared by every operation of
the client. Configuration is loaded from environment variables; the function
identifiers have no defaults since they are deployment specific.
"""

import logging
import os
from dataclasses import dataclass
from urllib.parse import urlparse

# Get logger for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TxSitterConfig:
    """Function identifiers and channel settings for the tx-sitter service.

    Attributes:
        send_lambda_name: Function that accepts new transactions
        rpc_lambda_name: Function that tunnels JSON-RPC requests
        transactions_lambda_name: Function that answers transaction queries
        region: AWS region of the functions (boto3 default chain when None)
        invoke_url: HTTP endpoint or unix socket path exposing the Lambda
            invoke API; when set it is used instead of AWS
    """

    send_lambda_name: str
    rpc_lambda_name: str
    transactions_lambda_name: str
    region: str | None = None
    invoke_url: str | None = None

    def __post_init__(self) -> None:
        """Validate the configuration."""
        for field_name, env_name in (
            ("send_lambda_name", "TX_SITTER_SEND_LAMBDA"),
            ("rpc_lambda_name", "TX_SITTER_RPC_LAMBDA"),
            ("transactions_lambda_name", "TX_SITTER_TRANSACTIONS_LAMBDA"),
        ):
            if not getattr(self, field_name):
                raise ValueError(f"{field_name} is required ({env_name})")

        if self.invoke_url and not self.invoke_url.startswith("/"):
            parsed = urlparse(self.invoke_url)
            if parsed.scheme not in ("http", "https"):
                raise ValueError(
                    f"Invalid invoke URL scheme: {parsed.scheme}. "
                    "Expected http, https, or an absolute unix socket path"
                )

    @classmethod
    def from_env(cls) -> "TxSitterConfig":
        """Load configuration from environment variables.

        Returns:
            TxSitterConfig instance with loaded values

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        send_lambda_name = os.environ.get("TX_SITTER_SEND_LAMBDA", "")
        if not send_lambda_name:
            raise ValueError(
                "TX_SITTER_SEND_LAMBDA environment variable is required. "
                "This should be the name or ARN of the send function."
            )

        rpc_lambda_name = os.environ.get("TX_SITTER_RPC_LAMBDA", "")
        if not rpc_lambda_name:
            raise ValueError(
                "TX_SITTER_RPC_LAMBDA environment variable is required. "
                "This should be the name or ARN of the rpc function."
            )

        transactions_lambda_name = os.environ.get("TX_SITTER_TRANSACTIONS_LAMBDA", "")
        if not transactions_lambda_name:
            raise ValueError(
                "TX_SITTER_TRANSACTIONS_LAMBDA environment variable is required. "
                "This should be the name or ARN of the transactions function."
            )

        return cls(
            send_lambda_name=send_lambda_name,
            rpc_lambda_name=rpc_lambda_name,
            transactions_lambda_name=transactions_lambda_name,
            region=os.environ.get("AWS_REGION") or None,
            invoke_url=os.environ.get("TX_SITTER_INVOKE_URL") or None,
        )

    def log_config(self) -> None:
        """Log the configuration in a readable format for debugging."""
        logger.info("=" * 60)
        logger.info("TxSitter Client Configuration")
        logger.info("=" * 60)

        logger.info("Functions:")
        logger.info(f"  Send: {self.send_lambda_name}")
        logger.info(f"  RPC: {self.rpc_lambda_name}")
        logger.info(f"  Transactions: {self.transactions_lambda_name}")

        logger.info("Channel:")
        if self.invoke_url:
            logger.info(f"  Invoke URL: {self.invoke_url}")
        else:
            logger.info(f"  AWS Region: {self.region or '[DEFAULT]'}")

        logger.info("=" * 60)
