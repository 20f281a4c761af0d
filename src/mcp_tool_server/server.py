"""MCP Server - routes decoded messages to protocol handlers.

Integrates lifecycle tracking, tool discovery and tool invocation into a
single dispatcher that turns every request into exactly one response
envelope and every notification into an acknowledgement.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any

from mcp_tool_server.audit import AuditLogger
from mcp_tool_server.config import ServerConfig
from mcp_tool_server.protocol.errors import (
    INTERNAL_ERROR,
    JsonRpcError,
    build_error,
    method_not_found,
)
from mcp_tool_server.protocol.jsonrpc import (
    ACKNOWLEDGEMENT,
    Acknowledgement,
    JsonRpcNotification,
    JsonRpcRequest,
    classify_message,
    decode_message,
    encode_message,
    format_response,
)
from mcp_tool_server.protocol.lifecycle import LifecycleTracker
from mcp_tool_server.protocol.tools import ToolsHandler
from mcp_tool_server.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

Outcome = dict[str, Any] | Acknowledgement


class Method(str, Enum):
    """Methods the server understands."""

    INITIALIZE = "initialize"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    NOTIFICATION_INITIALIZED = "notifications/initialized"
    NOTIFICATION_CANCELLED = "notifications/cancelled"

    @classmethod
    def lookup(cls, name: str) -> Method | None:
        """Return the method with this wire name, or None."""
        try:
            return cls(name)
        except ValueError:
            return None


def outcome_status(outcome: Outcome) -> int:
    """Map an outcome to the status class a transport should report.

    Args:
        outcome: Envelope or acknowledgement produced by the server.

    Returns:
        202 for acknowledgements, 200 for results, 500 for internal errors
        and 400 for every other error.
    """
    if isinstance(outcome, Acknowledgement):
        return 202
    error = outcome.get("error")
    if error is None:
        return 200
    if error.get("code") == INTERNAL_ERROR:
        return 500
    return 400


class MCPServer:
    """MCP Server implementation.

    Handles:
    - Lifecycle tracking (initialize/initialized)
    - Tool listing and execution
    - Notification logging
    """

    def __init__(self, registry: ToolRegistry, config: ServerConfig | None = None) -> None:
        """Initialize the server.

        Args:
            registry: Tools exposed by this server.
            config: Server configuration (defaults apply when omitted).
        """
        self._config = config or ServerConfig()
        self._registry = registry
        self._lifecycle = LifecycleTracker(
            server_info=self._config.server_info,
            protocol_version=self._config.protocol_version,
        )
        self._tools_handler = ToolsHandler(registry)

        if self._config.audit_log_file:
            self._audit_logger: AuditLogger | None = AuditLogger(
                Path(self._config.audit_log_file)
            )
        else:
            self._audit_logger = None

        self._request_handlers: dict[Method, Callable[[JsonRpcRequest], Any]] = {
            Method.INITIALIZE: self._handle_initialize,
            Method.TOOLS_LIST: self._handle_tools_list,
            Method.TOOLS_CALL: self._handle_tools_call,
        }
        self._notification_handlers: dict[Method, Callable[[JsonRpcNotification], None]] = {
            Method.NOTIFICATION_INITIALIZED: self._handle_initialized,
            Method.NOTIFICATION_CANCELLED: self._handle_cancelled,
        }

    @property
    def lifecycle(self) -> LifecycleTracker:
        """Handshake state, for diagnostics."""
        return self._lifecycle

    @property
    def registry(self) -> ToolRegistry:
        """Tools exposed by this server."""
        return self._registry

    def handle_raw(self, raw_message: str) -> str | None:
        """Handle a raw JSON-RPC message string.

        Args:
            raw_message: Raw JSON-RPC message string.

        Returns:
            Response string, or None for notifications.
        """
        try:
            data = decode_message(raw_message, self._config.max_message_size)
        except JsonRpcError as e:
            logger.warning("Rejected undecodable message: %s", e)
            return encode_message(e.to_envelope())

        outcome = self.handle_message(data)
        if isinstance(outcome, Acknowledgement):
            return None
        return encode_message(outcome)

    def handle_message(self, data: Any) -> Outcome:
        """Handle a decoded JSON-RPC message.

        Args:
            data: Decoded message delivered by the transport.

        Returns:
            Response envelope for requests, ACKNOWLEDGEMENT for notifications.
        """
        try:
            message = classify_message(data)
        except JsonRpcError as e:
            logger.warning("Invalid message: %s", e)
            return e.to_envelope()

        if isinstance(message, JsonRpcNotification):
            return self._handle_notification(message)
        return self._handle_request(message)

    def _handle_notification(self, notification: JsonRpcNotification) -> Acknowledgement:
        """Handle a notification; never answered with a body."""
        method = Method.lookup(notification.method)
        handler = self._notification_handlers.get(method) if method else None

        if handler is None:
            logger.info("Ignoring unrecognized notification: %s", notification.method)
            return ACKNOWLEDGEMENT

        try:
            handler(notification)
        except Exception:
            logger.exception("Notification handler failed for %s", notification.method)
        return ACKNOWLEDGEMENT

    def _handle_request(self, request: JsonRpcRequest) -> dict[str, Any]:
        """Handle a request and return exactly one response envelope."""
        method = Method.lookup(request.method)
        handler = self._request_handlers.get(method) if method else None

        if handler is None:
            return method_not_found(f"Unknown method: {request.method}", request.id).to_envelope()

        try:
            result = handler(request)
        except JsonRpcError as e:
            return build_error(e.code, e.message, request.id)
        except Exception:
            # Never leak internal exception text to the caller
            logger.exception("Unhandled error while processing %s", request.method)
            return build_error(INTERNAL_ERROR, "Internal error", request.id)

        return format_response(request.id, result)

    def _handle_initialize(self, request: JsonRpcRequest) -> dict[str, Any]:
        return self._lifecycle.handle_initialize(request.params)

    def _handle_tools_list(self, request: JsonRpcRequest) -> dict[str, Any]:
        return self._tools_handler.handle_list().to_dict()

    def _handle_tools_call(self, request: JsonRpcRequest) -> dict[str, Any]:
        params = request.params if isinstance(request.params, dict) else {}
        if self._audit_logger:
            self._audit_logger.log_request(request.id, params.get("name"), params.get("arguments"))

        start = time.perf_counter()
        try:
            result = self._tools_handler.handle_call(request.params, request.id)
        except JsonRpcError as e:
            self._audit_response(request.id, "error", start, e.code)
            raise
        except Exception:
            self._audit_response(request.id, "error", start, INTERNAL_ERROR)
            raise

        self._audit_response(request.id, "success", start)
        return result.to_dict()

    def _audit_response(
        self, request_id: Any, status: str, start: float, error_code: int | None = None
    ) -> None:
        if self._audit_logger:
            duration_ms = (time.perf_counter() - start) * 1000
            self._audit_logger.log_response(request_id, status, duration_ms, error_code)

    def _handle_initialized(self, notification: JsonRpcNotification) -> None:
        if not self._lifecycle.handle_initialized():
            logger.info("Duplicate initialized notification ignored")

    def _handle_cancelled(self, notification: JsonRpcNotification) -> None:
        # Tool calls run to completion; there is nothing to cancel
        params = notification.params if isinstance(notification.params, dict) else {}
        logger.info(
            "Cancellation requested for request %s (reason: %s); not supported",
            params.get("requestId"),
            params.get("reason", "unspecified"),
        )

    def close(self) -> None:
        """Close the server and release resources."""
        if self._audit_logger:
            self._audit_logger.close()

    def __enter__(self) -> MCPServer:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()
