"""Tool registry - immutable index of tools and the plugins that run them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from mcp_tool_server.tools.base import PluginBase, ToolDefinition


class DuplicateToolError(Exception):
    """Raised when two tools are registered under the same name."""

    pass


class InvalidToolSchemaError(Exception):
    """Raised when a tool advertises an input schema that is not valid JSON Schema."""

    pass


class ToolRegistry:
    """Read-only mapping of tool names to definitions and plugins.

    Built once at startup from a list of plugins. Tools keep the order in
    which they were registered; names must be unique.
    """

    def __init__(self, plugins: Iterable[PluginBase]) -> None:
        """Build the registry.

        Args:
            plugins: Plugins whose tools to index, in registration order.

        Raises:
            DuplicateToolError: If a tool name is registered twice.
            InvalidToolSchemaError: If a tool's input schema is invalid.
        """
        tools: dict[str, ToolDefinition] = {}
        owners: dict[str, PluginBase] = {}

        for plugin in plugins:
            for tool in plugin.get_tools():
                if tool.name in tools:
                    raise DuplicateToolError(
                        f"Tool '{tool.name}' from plugin '{plugin.name}' is already "
                        f"registered by plugin '{owners[tool.name].name}'"
                    )
                try:
                    Draft202012Validator.check_schema(tool.input_schema)
                except SchemaError as e:
                    raise InvalidToolSchemaError(
                        f"Invalid input schema for tool {tool.name}: {e.message}"
                    ) from e
                tools[tool.name] = tool
                owners[tool.name] = plugin

        self._tools = MappingProxyType(tools)
        self._owners = MappingProxyType(owners)

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def get(self, name: str) -> ToolDefinition | None:
        """Look up a tool definition by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[dict[str, Any]]:
        """List all tools in MCP format, in registration order."""
        return [tool.to_dict() for tool in self._tools.values()]

    def execute(self, name: str, arguments: dict[str, Any]) -> Any:
        """Run a registered tool with already validated arguments.

        Raises:
            KeyError: If the tool is not registered.
        """
        return self._owners[name].execute(name, arguments)
