#!/usr/bin/env python3
"""JSON-RPC bridge that tunnels requests through the rpc function."""

import logging
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from ..codec import decode_payload, encode_payload
from ..errors import MissingPayloadError
from .data import JsonRpcResponse, RpcLambdaRequest, RpcPayload

if TYPE_CHECKING:
    from ..config import TxSitterConfig
    from ..utils.lambda_utility import InvocationChannel

logger = logging.getLogger(__name__)

R = TypeVar("R")


class TxSitterRpcClient:
    """Sends JSON-RPC requests on behalf of one relayer.

    Every request is a single invocation of the rpc function; the JSON-RPC id
    is always 1, so callers must not use it to correlate concurrent requests.
    """

    def __init__(
        self,
        relayer_id: str,
        config: "TxSitterConfig",
        channel: "InvocationChannel",
    ) -> None:
        self.relayer_id: str = relayer_id
        self.config: TxSitterConfig = config
        self.channel: InvocationChannel = channel

    async def request(
        self,
        method: str,
        params: Any = None,
        result_decoder: Callable[[Any], R] | None = None,
    ) -> R:
        """
        Send a JSON-RPC request and return its result.

        Args:
            method: JSON-RPC method name (e.g., "eth_getTransactionByHash")
            params: JSON-compatible parameters
            result_decoder: Optional conversion applied to the raw result

        Returns:
            The result of the call, converted by result_decoder if given

        Raises:
            RpcError: If the node answered with an error object
            UnexpectedResponseError: If the response has both or neither of result and error
            MissingPayloadError: If the function returned no body
            SerializationError: If the request or response could not be (de)serialized
            TransportError: If the invocation failed
        """
        lambda_request = RpcLambdaRequest(
            payload=RpcPayload(method=method, params=params),
            relayer_id=self.relayer_id,
        )
        logger.debug(f"RPC {method} via relayer {self.relayer_id}")

        raw = await self.channel.invoke(
            self.config.rpc_lambda_name, encode_payload(lambda_request.to_dict())
        )
        if raw is None:
            logger.error(f"No payload returned for RPC {method}")
            raise MissingPayloadError("No payload returned from the RPC")

        response: JsonRpcResponse[R] = JsonRpcResponse.from_dict(
            decode_payload(raw), result_decoder
        )
        return response.into_result()
