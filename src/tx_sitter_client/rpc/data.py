#!/usr/bin/env python3
"""JSON-RPC envelopes exchanged with the rpc function.

The rpc function receives a JSON-RPC 2.0 request wrapped together with the
relayer it runs on behalf of, and answers with a plain JSON-RPC response.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from ..errors import RpcError, SerializationError, UnexpectedResponseError

JSONRPC_VERSION = "2.0"

R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class RpcPayload:
    """A JSON-RPC 2.0 request.

    The id is constant since every request travels in its own invocation and
    is never multiplexed with another one.
    """

    method: str
    params: Any = None
    id: int = 1
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "method": self.method,
            "params": self.params,
            "jsonrpc": self.jsonrpc,
        }


@dataclass(frozen=True, slots=True)
class RpcLambdaRequest:
    """Envelope sent to the rpc function."""

    payload: RpcPayload
    relayer_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"payload": self.payload.to_dict(), "relayerId": self.relayer_id}


@dataclass(frozen=True, slots=True)
class JsonRpcError:
    """Error object of a JSON-RPC response."""

    code: int
    message: str
    data: Any = None

    def __str__(self) -> str:
        return f"(code: {self.code}, message: {self.message}, data: {self.data})"

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "JsonRpcError":
        if not isinstance(data, dict):
            raise SerializationError("Invalid JSON-RPC error: expected a JSON object")
        code = data.get("code")
        message = data.get("message")
        if not isinstance(code, int) or isinstance(code, bool):
            raise SerializationError("Invalid JSON-RPC error: 'code' must be an integer")
        if not isinstance(message, str):
            raise SerializationError("Invalid JSON-RPC error: 'message' must be a string")
        return cls(code=code, message=message, data=data.get("data"))


@dataclass(frozen=True, slots=True)
class JsonRpcResponse(Generic[R]):
    """A decoded JSON-RPC response.

    A ``null`` result counts as absent, the same as a ``null`` error, so
    ``has_result`` is only set for a non-null result.
    """

    id: int
    jsonrpc: str
    result: R | None = None
    error: JsonRpcError | None = None
    has_result: bool = False

    @classmethod
    def from_dict(
        cls,
        data: Any,
        result_decoder: Callable[[Any], R] | None = None,
    ) -> "JsonRpcResponse[R]":
        """Decode a response object.

        Args:
            data: Parsed JSON payload
            result_decoder: Optional conversion applied to a present result

        Raises:
            SerializationError: If the envelope or the result cannot be decoded
        """
        if not isinstance(data, dict):
            raise SerializationError("Invalid JSON-RPC response: expected a JSON object")

        response_id = data.get("id")
        if not isinstance(response_id, int) or isinstance(response_id, bool):
            raise SerializationError("Invalid JSON-RPC response: 'id' must be an integer")

        version = data.get("jsonrpc")
        if version != JSONRPC_VERSION:
            raise SerializationError(
                f"Invalid JSON-RPC response: unsupported version {version!r}"
            )

        raw_result = data.get("result")
        has_result = raw_result is not None
        result = None
        if has_result:
            result = raw_result
            if result_decoder is not None:
                try:
                    result = result_decoder(raw_result)
                except SerializationError:
                    raise
                except (TypeError, ValueError, KeyError) as e:
                    raise SerializationError(f"Invalid JSON-RPC result: {e}", e) from e

        error = None
        if data.get("error") is not None:
            error = JsonRpcError.from_dict(data["error"])

        return cls(
            id=response_id,
            jsonrpc=version,
            result=result,
            error=error,
            has_result=has_result,
        )

    def into_result(self) -> R:
        """Return the result, or raise the error the response carries.

        Raises:
            RpcError: If only an error is present
            UnexpectedResponseError: If both or neither of result and error are present
        """
        match (self.has_result, self.error):
            case (True, None):
                return self.result
            case (False, JsonRpcError() as error):
                raise RpcError(error)
            case _:
                raise UnexpectedResponseError("Invalid response from the RPC")
