#!/usr/bin/env python3
"""Tests for the invocation channels.

The boto3 client and httpx.AsyncClient are replaced with mocks; no network
access happens here.
"""

import io
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import httpx
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from tx_sitter_client.config import TxSitterConfig
from tx_sitter_client.errors import TransportError
from tx_sitter_client.utils.lambda_utility import (
    HttpInvokeUtility,
    LambdaUtility,
    channel_from_config,
)


@pytest.fixture
def mock_lambda_client():
    """Create a mock boto3 Lambda client."""
    mock = MagicMock()
    mock.invoke = MagicMock(return_value={
        "StatusCode": 200,
        "Payload": io.BytesIO(b'{"ok":true}'),
    })
    return mock


def make_http_response(content: bytes = b"", headers: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.content = content
    response.headers = headers or {}
    response.raise_for_status = MagicMock()
    return response


class TestLambdaUtility:
    """Test suite for the boto3 backed channel."""

    def test_init_with_client(self, mock_lambda_client):
        utility = LambdaUtility(region="us-east-1", client=mock_lambda_client)
        assert utility.client is mock_lambda_client
        assert utility.region == "us-east-1"

    @patch("tx_sitter_client.utils.lambda_utility.boto3.client")
    def test_init_creates_client(self, mock_boto_client):
        utility = LambdaUtility(region="eu-west-1")
        mock_boto_client.assert_called_once_with("lambda", region_name="eu-west-1")
        assert utility.client is mock_boto_client.return_value

    @pytest.mark.asyncio
    async def test_invoke_success(self, mock_lambda_client):
        utility = LambdaUtility(client=mock_lambda_client)

        result = await utility.invoke("send-fn", b'{"to":"0xabc"}')

        assert result == b'{"ok":true}'
        mock_lambda_client.invoke.assert_called_once_with(
            FunctionName="send-fn", Payload=b'{"to":"0xabc"}'
        )

    @pytest.mark.asyncio
    async def test_invoke_empty_payload(self, mock_lambda_client):
        mock_lambda_client.invoke.return_value = {"StatusCode": 200, "Payload": io.BytesIO(b"")}
        utility = LambdaUtility(client=mock_lambda_client)

        assert await utility.invoke("send-fn", b"{}") is None

    @pytest.mark.asyncio
    async def test_invoke_no_payload_key(self, mock_lambda_client):
        mock_lambda_client.invoke.return_value = {"StatusCode": 202}
        utility = LambdaUtility(client=mock_lambda_client)

        assert await utility.invoke("send-fn", b"{}") is None

    @pytest.mark.asyncio
    async def test_invoke_client_error(self, mock_lambda_client):
        error = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "Function not found"}},
            "Invoke",
        )
        mock_lambda_client.invoke.side_effect = error
        utility = LambdaUtility(client=mock_lambda_client)

        with pytest.raises(TransportError, match="Failed to invoke send-fn") as exc_info:
            await utility.invoke("send-fn", b"{}")
        assert exc_info.value.cause is error
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_invoke_connection_error(self, mock_lambda_client):
        mock_lambda_client.invoke.side_effect = EndpointConnectionError(
            endpoint_url="https://lambda.us-east-1.amazonaws.com"
        )
        utility = LambdaUtility(client=mock_lambda_client)

        with pytest.raises(TransportError):
            await utility.invoke("send-fn", b"{}")

    @pytest.mark.asyncio
    async def test_invoke_function_error(self, mock_lambda_client):
        mock_lambda_client.invoke.return_value = {
            "StatusCode": 200,
            "FunctionError": "Unhandled",
            "Payload": io.BytesIO(b'{"errorMessage":"boom"}'),
        }
        utility = LambdaUtility(client=mock_lambda_client)

        with pytest.raises(TransportError, match="boom") as exc_info:
            await utility.invoke("send-fn", b"{}")
        assert exc_info.value.function_error == "Unhandled"


class TestHttpInvokeUtility:
    """Test suite for the httpx backed channel."""

    def test_init_requires_url(self):
        with pytest.raises(ValueError, match="Invoke URL is required"):
            HttpInvokeUtility("")

    @pytest.mark.asyncio
    @patch("tx_sitter_client.utils.lambda_utility.httpx.AsyncClient")
    async def test_invoke_http_url(self, mock_client_class):
        mock_client = AsyncMock()
        mock_client.post = AsyncMock(return_value=make_http_response(b'{"id":1}'))
        mock_client_class.return_value.__aenter__.return_value = mock_client

        utility = HttpInvokeUtility("http://127.0.0.1:3001/")
        result = await utility.invoke("send-fn", b"{}")

        assert result == b'{"id":1}'
        assert mock_client_class.call_args[1]["transport"] is None
        mock_client.post.assert_called_once_with(
            "http://127.0.0.1:3001/2015-03-31/functions/send-fn/invocations",
            content=b"{}",
            headers={"Content-Type": "application/json"},
            timeout=30.0,
        )

    @pytest.mark.asyncio
    @patch("tx_sitter_client.utils.lambda_utility.httpx.AsyncClient")
    async def test_invoke_quotes_arn(self, mock_client_class):
        mock_client = AsyncMock()
        mock_client.post = AsyncMock(return_value=make_http_response(b"{}"))
        mock_client_class.return_value.__aenter__.return_value = mock_client

        utility = HttpInvokeUtility("http://localhost:3001")
        await utility.invoke("arn:aws:lambda:us-east-1:123:function:Send", b"{}")

        url = mock_client.post.call_args[0][0]
        assert url.endswith("/functions/arn%3Aaws%3Alambda%3Aus-east-1%3A123%3Afunction%3ASend/invocations")

    @pytest.mark.asyncio
    @patch("tx_sitter_client.utils.lambda_utility.httpx.AsyncClient")
    async def test_invoke_socket_path(self, mock_client_class):
        mock_client = AsyncMock()
        mock_client.post = AsyncMock(return_value=make_http_response(b"{}"))
        mock_client_class.return_value.__aenter__.return_value = mock_client

        utility = HttpInvokeUtility("/run/lambda.sock")
        await utility.invoke("send-fn", b"{}")

        transport_arg = mock_client_class.call_args[1]["transport"]
        assert isinstance(transport_arg, httpx.AsyncHTTPTransport)
        assert mock_client.post.call_args[0][0] == (
            "http://localhost/2015-03-31/functions/send-fn/invocations"
        )

    @pytest.mark.asyncio
    @patch("tx_sitter_client.utils.lambda_utility.httpx.AsyncClient")
    async def test_invoke_empty_body(self, mock_client_class):
        mock_client = AsyncMock()
        mock_client.post = AsyncMock(return_value=make_http_response(b""))
        mock_client_class.return_value.__aenter__.return_value = mock_client

        utility = HttpInvokeUtility("http://localhost:3001")
        assert await utility.invoke("send-fn", b"{}") is None

    @pytest.mark.asyncio
    @patch("tx_sitter_client.utils.lambda_utility.httpx.AsyncClient")
    async def test_invoke_http_error(self, mock_client_class):
        mock_client = AsyncMock()
        response = make_http_response()
        response.raise_for_status = MagicMock(side_effect=httpx.HTTPStatusError(
            "Server error", request=Mock(), response=Mock()
        ))
        mock_client.post = AsyncMock(return_value=response)
        mock_client_class.return_value.__aenter__.return_value = mock_client

        utility = HttpInvokeUtility("http://localhost:3001")

        with pytest.raises(TransportError) as exc_info:
            await utility.invoke("send-fn", b"{}")
        assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    @patch("tx_sitter_client.utils.lambda_utility.httpx.AsyncClient")
    async def test_invoke_connect_error(self, mock_client_class):
        mock_client = AsyncMock()
        mock_client.post = AsyncMock(side_effect=httpx.ConnectError("refused"))
        mock_client_class.return_value.__aenter__.return_value = mock_client

        utility = HttpInvokeUtility("http://localhost:3001")

        with pytest.raises(TransportError, match="refused"):
            await utility.invoke("send-fn", b"{}")

    @pytest.mark.asyncio
    @patch("tx_sitter_client.utils.lambda_utility.httpx.AsyncClient")
    async def test_invoke_function_error_header(self, mock_client_class):
        mock_client = AsyncMock()
        mock_client.post = AsyncMock(return_value=make_http_response(
            b'{"errorMessage":"boom"}', {"X-Amz-Function-Error": "Unhandled"}
        ))
        mock_client_class.return_value.__aenter__.return_value = mock_client

        utility = HttpInvokeUtility("http://localhost:3001")

        with pytest.raises(TransportError, match="boom") as exc_info:
            await utility.invoke("send-fn", b"{}")
        assert exc_info.value.function_error == "Unhandled"


class TestChannelFromConfig:
    """Tests for channel selection."""

    def test_http_channel_when_invoke_url_set(self):
        config = TxSitterConfig(
            send_lambda_name="s",
            rpc_lambda_name="r",
            transactions_lambda_name="t",
            invoke_url="http://localhost:3001",
        )
        channel = channel_from_config(config)
        assert isinstance(channel, HttpInvokeUtility)
        assert channel.url == "http://localhost:3001"

    @patch("tx_sitter_client.utils.lambda_utility.boto3.client")
    def test_lambda_channel_by_default(self, mock_boto_client):
        config = TxSitterConfig(
            send_lambda_name="s",
            rpc_lambda_name="r",
            transactions_lambda_name="t",
            region="us-east-1",
        )
        channel = channel_from_config(config)
        assert isinstance(channel, LambdaUtility)
        mock_boto_client.assert_called_once_with("lambda", region_name="us-east-1")
