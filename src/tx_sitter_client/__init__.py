"""
TxSitter client package.

Relays and queries blockchain transactions through the tx-sitter functions,
and exposes a relayer scoped JSON-RPC bridge usable as a web3 provider.
"""

from .client import TxSitterClient
from .config import TxSitterConfig
from .errors import (
    MissingPayloadError,
    NotFoundError,
    RpcError,
    SerializationError,
    TransportError,
    TxSitterError,
    UnexpectedResponseError,
)
from .models import (
    CreateRelayerRequest,
    RelayerDetails,
    ReqByRelayerIdAndStatus,
    ReqTransactionById,
    Transaction,
    TransactionInput,
    TransactionPriority,
    TransactionRequest,
    TransactionStatus,
    TransactionType,
)
from .rpc import JsonRpcError, TxSitterProvider, TxSitterRpcClient

__all__ = [
    "TxSitterClient",
    "TxSitterConfig",
    "TxSitterRpcClient",
    "TxSitterProvider",
    "JsonRpcError",
    "TransactionInput",
    "Transaction",
    "TransactionStatus",
    "TransactionPriority",
    "TransactionType",
    "TransactionRequest",
    "ReqTransactionById",
    "ReqByRelayerIdAndStatus",
    "CreateRelayerRequest",
    "RelayerDetails",
    "TxSitterError",
    "SerializationError",
    "TransportError",
    "MissingPayloadError",
    "RpcError",
    "NotFoundError",
    "UnexpectedResponseError",
]
__version__ = "0.1.0"
