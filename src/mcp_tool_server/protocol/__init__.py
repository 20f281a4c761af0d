"""MCP Protocol layer for JSON-RPC communication."""

from mcp_tool_server.protocol.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ErrorKind,
    JsonRpcError,
    build_error,
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
from mcp_tool_server.protocol.lifecycle import (
    MCP_PROTOCOL_VERSION,
    LifecycleState,
    LifecycleTracker,
)
from mcp_tool_server.protocol.tools import ToolsCallResult, ToolsHandler, ToolsListResult
from mcp_tool_server.protocol.transport import StdioTransport

__all__ = [
    "ACKNOWLEDGEMENT",
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "MCP_PROTOCOL_VERSION",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "Acknowledgement",
    "ErrorKind",
    "JsonRpcError",
    "JsonRpcNotification",
    "JsonRpcRequest",
    "LifecycleState",
    "LifecycleTracker",
    "StdioTransport",
    "ToolsCallResult",
    "ToolsHandler",
    "ToolsListResult",
    "build_error",
    "classify_message",
    "decode_message",
    "encode_message",
    "format_response",
]
