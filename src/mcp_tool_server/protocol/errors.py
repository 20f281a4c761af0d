"""JSON-RPC 2.0 error taxonomy and error envelope construction."""

from __future__ import annotations

from enum import Enum
from typing import Any

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ErrorKind(Enum):
    """The closed set of error outcomes a request can produce."""

    PARSE_ERROR = PARSE_ERROR
    INVALID_REQUEST = INVALID_REQUEST
    METHOD_NOT_FOUND = METHOD_NOT_FOUND
    INVALID_PARAMS = INVALID_PARAMS
    INTERNAL_ERROR = INTERNAL_ERROR

    @property
    def code(self) -> int:
        """Return the numeric JSON-RPC error code."""
        return self.value


def build_error(kind: ErrorKind | int, message: str, msg_id: Any = None) -> dict[str, Any]:
    """Build a JSON-RPC error envelope.

    Args:
        kind: Error kind or raw error code.
        message: Human-readable error message.
        msg_id: Request ID to echo back (None when it cannot be determined).

    Returns:
        Error envelope with exactly one ``error`` member.
    """
    code = kind.code if isinstance(kind, ErrorKind) else kind
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": msg_id,
        "error": {"code": code, "message": message},
    }


class JsonRpcError(Exception):
    """JSON-RPC error with code, message and the request ID to echo."""

    def __init__(self, code: int, message: str, msg_id: Any = None) -> None:
        """Initialize the error.

        Args:
            code: JSON-RPC error code.
            message: Human-readable error message.
            msg_id: Request ID the error answers, if known.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.msg_id = msg_id

    @property
    def kind(self) -> ErrorKind:
        """Return the error kind for this error's code."""
        return ErrorKind(self.code)

    def to_envelope(self) -> dict[str, Any]:
        """Convert to a JSON-RPC error envelope."""
        return build_error(self.code, self.message, self.msg_id)


def invalid_request(message: str, msg_id: Any = None) -> JsonRpcError:
    return JsonRpcError(INVALID_REQUEST, f"Invalid Request: {message}", msg_id)


def method_not_found(message: str, msg_id: Any = None) -> JsonRpcError:
    return JsonRpcError(METHOD_NOT_FOUND, message, msg_id)


def invalid_params(message: str, msg_id: Any = None) -> JsonRpcError:
    return JsonRpcError(INVALID_PARAMS, message, msg_id)
