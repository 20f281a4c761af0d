"""JSON-RPC 2.0 message decoding, classification and formatting.

Classification follows the message shape rather than the method name:
a message carrying an ``id`` member is a request (even when the id is
``null``), a message with a ``method`` but no ``id`` is a notification,
and anything else is malformed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from mcp_tool_server.protocol.errors import (
    JSONRPC_VERSION,
    PARSE_ERROR,
    JsonRpcError,
    invalid_request,
)

# Maximum message size (1 MB)
MAX_MESSAGE_SIZE = 1_048_576

_SCALAR_ID_TYPES = (str, int, float, bool)


@dataclass(frozen=True)
class JsonRpcRequest:
    """Represents a JSON-RPC request (has id)."""

    id: Any
    method: str
    params: Any = None


@dataclass(frozen=True)
class JsonRpcNotification:
    """Represents a JSON-RPC notification (no id)."""

    method: str
    params: Any = None


class Acknowledgement:
    """Zero-payload outcome of a processed notification."""

    _instance: Acknowledgement | None = None

    def __new__(cls) -> Acknowledgement:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ACKNOWLEDGEMENT"

    def __bool__(self) -> bool:
        return False


ACKNOWLEDGEMENT = Acknowledgement()


def decode_message(raw: str, max_size: int = MAX_MESSAGE_SIZE) -> Any:
    """Decode a raw message string into a JSON value.

    Args:
        raw: Raw JSON string.
        max_size: Largest accepted message, in characters.

    Returns:
        The decoded JSON value (not yet classified).

    Raises:
        JsonRpcError: PARSE_ERROR if the message is too large or not JSON.
    """
    # Check message size before parsing to prevent DoS
    if len(raw) > max_size:
        raise JsonRpcError(
            PARSE_ERROR, f"Parse error: message too large ({len(raw)} exceeds {max_size} limit)"
        )

    # ValueError covers JSONDecodeError and over-long integer literals;
    # RecursionError covers pathologically deep nesting
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise JsonRpcError(PARSE_ERROR, f"Parse error: {e}") from e


def classify_message(data: Any) -> JsonRpcRequest | JsonRpcNotification:
    """Classify a decoded message as a request or a notification.

    Args:
        data: Decoded JSON value delivered by the transport.

    Returns:
        Parsed request or notification.

    Raises:
        JsonRpcError: INVALID_REQUEST if the message is malformed. The error
            carries the request ID to echo, or None if there is none.
    """
    if not isinstance(data, dict):
        raise invalid_request("message must be an object")

    if "id" in data:
        msg_id = data["id"]
        if msg_id is not None and not isinstance(msg_id, _SCALAR_ID_TYPES):
            raise invalid_request("id must be a string, number or null")

        if data.get("jsonrpc") != JSONRPC_VERSION:
            raise invalid_request(f"jsonrpc must be '{JSONRPC_VERSION}'", msg_id)

        method = data.get("method")
        if not isinstance(method, str):
            raise invalid_request("method must be a string", msg_id)

        return JsonRpcRequest(id=msg_id, method=method, params=data.get("params"))

    # Notifications are fire-and-forget, so the version tag is not re-checked
    if "method" in data:
        method = data["method"]
        # A notification is never rejected; an odd method is just unrecognized
        if not isinstance(method, str):
            method = json.dumps(method)
        return JsonRpcNotification(method=method, params=data.get("params"))

    raise invalid_request("message has neither id nor method")


def format_response(msg_id: Any, result: Any) -> dict[str, Any]:
    """Format a successful JSON-RPC response.

    Args:
        msg_id: Request ID to echo back.
        result: Result payload.

    Returns:
        Response envelope with exactly one ``result`` member.
    """
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": msg_id,
        "result": result,
    }


def encode_message(envelope: dict[str, Any]) -> str:
    """Serialize an envelope for the wire."""
    return json.dumps(envelope)
