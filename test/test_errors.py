#!/usr/bin/env python3
"""Tests for the error taxonomy inspection helpers."""

import json

import pytest

from tx_sitter_client.errors import (
    MissingPayloadError,
    NotFoundError,
    RpcError,
    SerializationError,
    TransportError,
    TxSitterError,
    UnexpectedResponseError,
)
from tx_sitter_client.rpc.data import JsonRpcError


class TestErrorInspection:
    """Only RpcError exposes a response, only SerializationError a codec error."""

    def test_rpc_error(self):
        error = RpcError(JsonRpcError(code=-32000, message="not found", data="0x"))

        assert error.as_error_response() == JsonRpcError(code=-32000, message="not found", data="0x")
        assert error.as_serialization_error() is None
        assert (error.code, error.message, error.data) == (-32000, "not found", "0x")
        assert "not found" in str(error)

    def test_rpc_error_structured_data(self):
        error = RpcError(JsonRpcError(code=3, message="execution reverted", data={"reason": "paused"}))

        assert error.data == {"reason": "paused"}

    def test_rpc_error_without_data(self):
        error = RpcError(JsonRpcError(code=-32601, message="method not found"))

        assert error.data is None

    def test_serialization_error_with_cause(self):
        try:
            json.loads("{")
        except json.JSONDecodeError as e:
            cause = e
        error = SerializationError("Payload is not valid JSON", cause)

        assert error.as_serialization_error() is cause
        assert error.as_error_response() is None

    def test_serialization_error_without_cause(self):
        error = SerializationError("missing field 'txHash'")
        assert error.as_serialization_error() is error

    @pytest.mark.parametrize(
        "error",
        [
            TransportError("throttled"),
            MissingPayloadError(),
            NotFoundError("Transaction tx-1 not found"),
            UnexpectedResponseError("Invalid response from the RPC"),
        ],
    )
    def test_other_kinds_answer_negatively(self, error):
        assert isinstance(error, TxSitterError)
        assert error.as_error_response() is None
        assert error.as_serialization_error() is None

    def test_missing_payload_default_message(self):
        assert str(MissingPayloadError()) == "No payload returned from the function"
