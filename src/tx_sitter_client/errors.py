#!/usr/bin/env python3
"""Error types raised by the tx-sitter clients.

Every failure surfaced by the transaction client or the JSON-RPC bridge is
one of the subclasses of TxSitterError defined here. Callers that only need
to tell "the service rejected the call" apart from "the response could not be
read" can use the two inspection helpers on the base class instead of
matching on concrete types.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .rpc.data import JsonRpcError


class TxSitterError(Exception):
    """Base class for all tx-sitter client failures."""

    def as_error_response(self) -> "JsonRpcError | None":
        """Return the JSON-RPC error object if this is an RPC application error."""
        return None

    def as_serialization_error(self) -> Exception | None:
        """Return the underlying codec exception if this wraps one."""
        return None


class SerializationError(TxSitterError):
    """Encoding a request or decoding a response failed.

    Raised for payloads that are not valid UTF-8, not valid JSON, or that do
    not have the shape the operation expects.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause: Exception | None = cause

    def as_serialization_error(self) -> Exception:
        return self.cause if self.cause is not None else self


class TransportError(TxSitterError):
    """The invocation channel call itself failed.

    Attributes:
        cause: Native exception raised by the channel library, if any
        function_error: Error marker reported by the remote function runtime
            (e.g. ``Unhandled``) when the function itself crashed
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        function_error: str | None = None,
    ) -> None:
        super().__init__(message)
        self.cause: Exception | None = cause
        self.function_error: str | None = function_error


class MissingPayloadError(TxSitterError):
    """The channel call succeeded but returned an empty body."""

    def __init__(self, message: str = "No payload returned from the function") -> None:
        super().__init__(message)


class RpcError(TxSitterError):
    """The remote JSON-RPC layer answered with an error object."""

    def __init__(self, error: "JsonRpcError") -> None:
        super().__init__(f"RPC returned with an error: {error}")
        self.error: JsonRpcError = error

    @property
    def code(self) -> int:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def data(self) -> Any:
        return self.error.data

    def as_error_response(self) -> "JsonRpcError":
        return self.error


class NotFoundError(TxSitterError):
    """A by-id lookup returned no transaction record."""


class UnexpectedResponseError(TxSitterError):
    """A response violated the protocol in a way no other error describes."""
