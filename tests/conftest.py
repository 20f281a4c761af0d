"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from mcp_tool_server.plugins import builtin_plugins
from mcp_tool_server.server import MCPServer
from mcp_tool_server.tools.base import ParameterSpec, ParamType, PluginBase, ToolDefinition
from mcp_tool_server.tools.registry import ToolRegistry


class MockPlugin(PluginBase):
    """Mock plugin for testing."""

    def __init__(self, tools: list[ToolDefinition] | None = None) -> None:
        self._tools = tools if tools is not None else [
            ToolDefinition(
                name="greet",
                description="Greets someone",
                parameters=(
                    ParameterSpec("name", ParamType.STRING, "Who to greet"),
                    ParameterSpec("loud", ParamType.BOOLEAN, required=False, default=False),
                ),
            ),
            ToolDefinition(
                name="crash",
                description="Always crashes",
            ),
            ToolDefinition(
                name="explode",
                description="Fails with an exception that has no message",
            ),
        ]

    @property
    def name(self) -> str:
        return "mock"

    def get_tools(self) -> list[ToolDefinition]:
        return self._tools

    def execute(self, tool_name: str, arguments: dict[str, Any]) -> Any:
        if tool_name == "greet":
            greeting = f"Hello, {arguments['name']}"
            return greeting.upper() if arguments["loud"] else greeting
        if tool_name == "crash":
            raise RuntimeError("Intentional crash for testing")
        raise ValueError()


@pytest.fixture
def registry() -> ToolRegistry:
    """Registry with the built-in tools."""
    return ToolRegistry(builtin_plugins())


@pytest.fixture
def server(registry: ToolRegistry) -> MCPServer:
    """Server exposing the built-in tools with default config."""
    return MCPServer(registry)


@pytest.fixture
def mock_server() -> MCPServer:
    """Server exposing the built-in tools followed by the mock tools."""
    return MCPServer(ToolRegistry([*builtin_plugins(), MockPlugin()]))


def make_request(msg_id: Any, method: str, params: Any = None) -> dict[str, Any]:
    """Build a decoded JSON-RPC request."""
    request: dict[str, Any] = {"jsonrpc": "2.0", "id": msg_id, "method": method}
    if params is not None:
        request["params"] = params
    return request


def make_call(msg_id: Any, name: str, arguments: Any) -> dict[str, Any]:
    """Build a decoded tools/call request."""
    return make_request(msg_id, "tools/call", {"name": name, "arguments": arguments})
