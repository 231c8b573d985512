"""JSON-RPC bridge to the tx-sitter rpc function."""

from .client import TxSitterRpcClient
from .data import JsonRpcError, JsonRpcResponse, RpcLambdaRequest, RpcPayload
from .provider import TxSitterProvider

__all__ = [
    "JsonRpcError",
    "JsonRpcResponse",
    "RpcLambdaRequest",
    "RpcPayload",
    "TxSitterProvider",
    "TxSitterRpcClient",
]
