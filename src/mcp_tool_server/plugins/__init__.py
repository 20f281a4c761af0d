"""Built-in tool plugins."""

from mcp_tool_server.plugins.calculator import CalculatorPlugin
from mcp_tool_server.plugins.text import TextPlugin
from mcp_tool_server.tools.base import PluginBase


def builtin_plugins() -> list[PluginBase]:
    """Return the plugins registered by default, in listing order."""
    return [CalculatorPlugin(), TextPlugin()]


__all__ = [
    "CalculatorPlugin",
    "TextPlugin",
    "builtin_plugins",
]
