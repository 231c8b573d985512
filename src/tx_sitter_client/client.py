#!/usr/bin/env python3
"""Transaction management client for the tx-sitter service.

The client talks to two functions directly: the send function, which accepts
new transactions, and the transactions function, which answers queries by
transaction id or by relayer and status. JSON-RPC traffic goes through the
relayer scoped bridge returned by ``get_provider``.
"""

import logging
from typing import Any

from .codec import decode_payload, encode_payload
from .config import TxSitterConfig
from .errors import MissingPayloadError, NotFoundError, SerializationError
from .models import (
    ReqByRelayerIdAndStatus,
    ReqTransactionById,
    Transaction,
    TransactionInput,
    TransactionRequest,
    TransactionResponse,
    TransactionStatus,
)
from .rpc.client import TxSitterRpcClient
from .utils.lambda_utility import InvocationChannel, channel_from_config

logger = logging.getLogger(__name__)


class TxSitterClient:
    """Relays and looks up transactions through the tx-sitter functions.

    Holds only the configuration and the channel, neither of which changes
    after construction, so one instance can serve concurrent calls.
    """

    def __init__(
        self,
        config: TxSitterConfig,
        channel: InvocationChannel | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Function identifiers and channel settings
            channel: Invocation channel to use (built from config when None)
        """
        self.config: TxSitterConfig = config
        self.channel: InvocationChannel = (
            channel if channel is not None else channel_from_config(config)
        )

    @classmethod
    def from_env(cls) -> "TxSitterClient":
        """Create a client from environment configuration."""
        return cls(TxSitterConfig.from_env())

    def get_provider(self, relayer_id: str) -> TxSitterRpcClient:
        """Return a JSON-RPC bridge that runs requests on behalf of a relayer."""
        return TxSitterRpcClient(relayer_id, self.config, self.channel)

    async def _invoke(self, function_name: str, body: Any) -> Any:
        payload = encode_payload(body)
        raw = await self.channel.invoke(function_name, payload)
        if raw is None:
            logger.error(f"No payload returned from {function_name}")
            raise MissingPayloadError()
        return decode_payload(raw)

    async def relay_transaction(self, transaction: TransactionInput) -> str:
        """
        Submit a transaction to the send function.

        Args:
            transaction: Transaction to relay

        Returns:
            Identifier assigned to the transaction by the service

        Raises:
            MissingPayloadError: If the function returned no body
            SerializationError: If the response is not a valid transaction response
            TransportError: If the invocation failed
        """
        logger.info(f"Sending a tx-sitter transaction: {transaction}")

        response = TransactionResponse.from_dict(
            await self._invoke(self.config.send_lambda_name, transaction.to_dict())
        )

        logger.info(f"Transaction accepted with id {response.result}")
        return response.result

    async def get_transaction_by_relayer_and_status(
        self,
        relayer_id: str,
        status: TransactionStatus,
    ) -> list[TransactionInput]:
        """
        List the transactions of a relayer that are in a given status.

        The service answers with a bare list of input records; these do not
        carry the transaction hash.

        Raises:
            MissingPayloadError: If the function returned no body
            SerializationError: If the body is not a list of transaction records
            TransportError: If the invocation failed
        """
        request: TransactionRequest = ReqByRelayerIdAndStatus(relayer_id=relayer_id, status=status)
        logger.info(f"Fetching {status.value} transactions for relayer {relayer_id}")

        data = await self._invoke(self.config.transactions_lambda_name, request.to_dict())

        if not isinstance(data, list):
            raise SerializationError(
                f"Invalid transaction payload: expected a list, got {type(data).__name__}"
            )

        transactions = [TransactionInput.from_dict(item) for item in data]
        logger.debug(f"Relayer {relayer_id} has {len(transactions)} {status.value} transactions")
        return transactions

    async def get_transaction_by_id(self, transaction_id: str) -> Transaction:
        """
        Look up a single transaction by its id.

        Raises:
            NotFoundError: If the response holds no transaction
            MissingPayloadError: If the function returned no body
            SerializationError: If the record does not decode into a Transaction
            TransportError: If the invocation failed
        """
        request: TransactionRequest = ReqTransactionById(transaction_id=transaction_id)
        logger.info(f"Fetching transaction {transaction_id}")

        data = await self._invoke(self.config.transactions_lambda_name, request.to_dict())

        transactions = data.get("transactions") if isinstance(data, dict) else None
        if not isinstance(transactions, list) or not transactions:
            logger.warning(f"Transaction {transaction_id} not found")
            raise NotFoundError(f"Transaction {transaction_id} not found or invalid format")

        return Transaction.from_dict(transactions[0])
