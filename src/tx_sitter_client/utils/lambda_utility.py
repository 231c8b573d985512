import asyncio
import logging
from typing import TYPE_CHECKING, Any, Protocol
from urllib.parse import quote

import boto3
import httpx
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import TransportError

if TYPE_CHECKING:
    from ..config import TxSitterConfig

logger = logging.getLogger(__name__)


class InvocationChannel(Protocol):
    """Calls a named remote function with an opaque payload."""

    async def invoke(self, function_name: str, payload: bytes) -> bytes | None:
        """Invoke a function and return its response body, or None if empty.

        Raises:
            TransportError: If the call itself failed
        """
        ...


class LambdaUtility:
    """Invocation channel backed by the AWS Lambda Invoke API.

    The boto3 client is blocking, so each call runs in a worker thread.
    Credentials and region resolve through the usual boto3 chain.
    """

    def __init__(self, region: str | None = None, client: Any = None) -> None:
        """
        Initialize the Lambda utility.

        Args:
            region: AWS region of the functions (boto3 default when None)
            client: Preconfigured boto3 Lambda client
        """
        self.region: str | None = region
        self.client: Any = client if client is not None else boto3.client(
            "lambda", region_name=region
        )

    def _invoke_sync(self, function_name: str, payload: bytes) -> tuple[str | None, bytes]:
        response = self.client.invoke(FunctionName=function_name, Payload=payload)
        body = response.get("Payload")
        raw: bytes = body.read() if body is not None else b""
        return response.get("FunctionError"), raw

    async def invoke(self, function_name: str, payload: bytes) -> bytes | None:
        logger.debug(f"Invoking {function_name} with {len(payload)} bytes")
        try:
            function_error, raw = await asyncio.to_thread(
                self._invoke_sync, function_name, payload
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Lambda invoke of {function_name} failed: {e}")
            raise TransportError(f"Failed to invoke {function_name}: {e}", e) from e

        if function_error:
            detail = raw.decode("utf-8", errors="replace")
            logger.error(f"Function {function_name} raised {function_error}: {detail}")
            raise TransportError(
                f"Function {function_name} failed ({function_error}): {detail}",
                function_error=function_error,
            )

        return raw or None


class HttpInvokeUtility:
    """Invocation channel speaking the Lambda invoke REST API over plain HTTP.

    Meant for local function emulators (e.g. ``sam local start-lambda``).
    A url that does not start with ``http`` is used as a unix domain socket.
    """

    INVOKE_PATH: str = "/2015-03-31/functions/{function_name}/invocations"

    def __init__(self, url: str, timeout: float | None = 30.0) -> None:
        """
        Initialize the HTTP invoke utility.

        Args:
            url: Base URL of the endpoint or a unix socket path
            timeout: Request timeout in seconds (None disables it)
        """
        if not url:
            raise ValueError("Invoke URL is required")
        self.url: str = url
        self.timeout: float | None = timeout

    async def invoke(self, function_name: str, payload: bytes) -> bytes | None:
        transport: httpx.AsyncHTTPTransport | None = None

        if not self.url.startswith('http'):
            transport = httpx.AsyncHTTPTransport(uds=self.url)
            logger.debug(f"Using unix domain socket: {self.url}")

        path = self.INVOKE_PATH.format(function_name=quote(function_name, safe=""))
        base_url: str = self.url.rstrip('/') if self.url.startswith('http') else "http://localhost"
        full_url: str = base_url + path

        async with httpx.AsyncClient(transport=transport) as client:
            logger.debug(f"Posting {len(payload)} bytes to {full_url}")
            try:
                response: httpx.Response = await client.post(
                    full_url,
                    content=payload,
                    headers={"Content-Type": "application/json"},
                    timeout=self.timeout,
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error(f"HTTP invoke of {function_name} failed: {e}")
                raise TransportError(f"Failed to invoke {function_name}: {e}", e) from e

        raw: bytes = response.content
        if function_error := response.headers.get("X-Amz-Function-Error"):
            detail = raw.decode("utf-8", errors="replace")
            logger.error(f"Function {function_name} raised {function_error}: {detail}")
            raise TransportError(
                f"Function {function_name} failed ({function_error}): {detail}",
                function_error=function_error,
            )

        return raw or None


def channel_from_config(config: "TxSitterConfig") -> InvocationChannel:
    """Build the invocation channel selected by the configuration."""
    if config.invoke_url:
        return HttpInvokeUtility(config.invoke_url)
    return LambdaUtility(region=config.region)
