"""JSON payload helpers shared by every envelope exchanged with the functions."""

import json
from typing import Any

from .errors import SerializationError


def encode_payload(value: Any) -> bytes:
    """Serialize a JSON-compatible value to a compact UTF-8 payload.

    Raises:
        SerializationError: If the value is not JSON serializable
    """
    try:
        return json.dumps(value, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode payload: {e}", e) from e


def decode_payload(raw: bytes) -> Any:
    """Parse a UTF-8 JSON payload returned by a function.

    Raises:
        SerializationError: If the payload is not valid UTF-8 or not valid JSON
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SerializationError(f"Payload is not valid UTF-8: {e}", e) from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Payload is not valid JSON: {e}", e) from e
