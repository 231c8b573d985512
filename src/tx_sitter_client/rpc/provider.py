"""web3.py provider backed by the tx-sitter JSON-RPC bridge.

Lets an ``AsyncWeb3`` instance (and everything built on it, such as contract
calls) run against a relayer without knowing about the rpc function.
"""

import logging
from typing import Any

from web3.exceptions import ProviderConnectionError
from web3.providers import AsyncBaseProvider
from web3.types import RPCEndpoint, RPCResponse

from ..errors import RpcError, TxSitterError
from .client import TxSitterRpcClient
from .data import JSONRPC_VERSION

logger = logging.getLogger(__name__)


class TxSitterProvider(AsyncBaseProvider):
    """Async web3 provider that forwards requests to a TxSitterRpcClient.

    JSON-RPC errors reported by the node are handed back as error responses
    so web3 raises its usual RPC error; every other failure propagates as the
    TxSitterError raised by the bridge.
    """

    def __init__(self, rpc_client: TxSitterRpcClient, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.rpc_client: TxSitterRpcClient = rpc_client

    def __str__(self) -> str:
        return f"TxSitterProvider<relayer={self.rpc_client.relayer_id}>"

    async def make_request(self, method: RPCEndpoint, params: Any) -> RPCResponse:
        try:
            result = await self.rpc_client.request(method, params)
        except RpcError as e:
            return RPCResponse(jsonrpc=JSONRPC_VERSION, id=1, error=e.error.to_dict())
        return RPCResponse(jsonrpc=JSONRPC_VERSION, id=1, result=result)

    async def is_connected(self, show_traceback: bool = False) -> bool:
        try:
            await self.rpc_client.request("eth_chainId", [])
        except TxSitterError as e:
            if show_traceback:
                raise ProviderConnectionError(
                    f"Problem connecting to provider with error: {type(e)}: {e}"
                ) from e
            logger.warning(f"{self} is not connected: {e}")
            return False
        return True
