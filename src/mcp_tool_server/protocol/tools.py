"""MCP tools/list and tools/call handlers.

Handles tool-related MCP requests: looks tools up in the registry,
validates arguments and formats results according to the MCP
specification.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from mcp_tool_server.protocol.errors import invalid_params, method_not_found
from mcp_tool_server.tools.registry import ToolRegistry
from mcp_tool_server.tools.validator import Invalid, validate_arguments

logger = logging.getLogger(__name__)

RESULT_PREFIX = "Result: "


def format_value(value: Any) -> str:
    """Render a tool's return value as text.

    Integral floats drop their fractional part, booleans and containers
    are rendered as JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return json.dumps(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, dict | list | tuple):
        return json.dumps(value)
    return str(value)


@dataclass
class ToolsListResult:
    """Result of tools/list request."""

    tools: list[dict[str, Any]]

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP result format.

        Returns:
            Dictionary in MCP tools/list result format.
        """
        return {"tools": self.tools}


@dataclass
class ToolsCallResult:
    """Result of a successful tools/call request."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP result format.

        Returns:
            Dictionary in MCP tools/call result format.
        """
        return {"content": [{"type": "text", "text": self.text}]}


class ToolsHandler:
    """Handles tools/list and tools/call MCP requests."""

    def __init__(self, registry: ToolRegistry) -> None:
        """Initialize the handler.

        Args:
            registry: Registry of callable tools.
        """
        self._registry = registry

    def handle_list(self) -> ToolsListResult:
        """Handle tools/list request.

        Returns:
            ToolsListResult with all tools, in registration order.
        """
        return ToolsListResult(tools=self._registry.list_tools())

    def handle_call(self, params: Any, msg_id: Any = None) -> ToolsCallResult:
        """Handle tools/call request.

        Args:
            params: Request params; must hold ``name`` and ``arguments``.
            msg_id: Request ID, carried by any error raised.

        Returns:
            ToolsCallResult with the tool's output.

        Raises:
            JsonRpcError: METHOD_NOT_FOUND for an unknown tool, INVALID_PARAMS
                for missing or invalid arguments and for tool failures.
        """
        if not isinstance(params, dict):
            raise invalid_params("Invalid params: params must be an object", msg_id)
        if "name" not in params:
            raise invalid_params("Missing required field: name", msg_id)
        if "arguments" not in params:
            raise invalid_params("Missing required field: arguments", msg_id)

        name = params["name"]
        arguments = params["arguments"]
        if not isinstance(name, str):
            raise invalid_params("Invalid field: name must be a string", msg_id)
        if not isinstance(arguments, dict):
            raise invalid_params("Invalid field: arguments must be an object", msg_id)

        tool = self._registry.get(name)
        if tool is None:
            raise method_not_found(f"Tool not found: {name}", msg_id)

        outcome = validate_arguments(tool, arguments)
        if isinstance(outcome, Invalid):
            raise invalid_params(outcome.message, msg_id)

        # Rendering the value is part of the tool's outcome: an unprintable
        # result is a tool failure, not a router fault
        try:
            value = self._registry.execute(name, outcome.arguments)
            text = format_value(value)
        except Exception as e:
            logger.warning("Tool '%s' failed: %s", name, e)
            raise invalid_params(str(e) or f"Tool '{name}' execution failed", msg_id) from e

        return ToolsCallResult(text=RESULT_PREFIX + text)
