"""Text plugin.

Provides simple string transformations.
"""

from __future__ import annotations

from typing import Any

from mcp_tool_server.tools.base import (
    ParameterSpec,
    ParamType,
    PluginBase,
    ToolDefinition,
    ToolError,
)

MAX_REPEAT = 100

_TEXT = ParameterSpec("text", ParamType.STRING, "Text to transform")


class TextPlugin(PluginBase):
    """String tools: reverse, uppercase, word_count and echo."""

    @property
    def name(self) -> str:
        return "text"

    def get_tools(self) -> list[ToolDefinition]:
        return [
            ToolDefinition("reverse", "Reverse the characters of a string", (_TEXT,)),
            ToolDefinition("uppercase", "Convert a string to upper case", (_TEXT,)),
            ToolDefinition("word_count", "Count the words in a string", (_TEXT,)),
            ToolDefinition(
                "echo",
                "Echo a string back, optionally repeated",
                (
                    _TEXT,
                    ParameterSpec(
                        "repeat",
                        ParamType.NUMBER,
                        f"How many times to repeat the text (1-{MAX_REPEAT})",
                        required=False,
                        default=1,
                    ),
                ),
            ),
        ]

    def execute(self, tool_name: str, arguments: dict[str, Any]) -> Any:
        text = arguments["text"]

        if tool_name == "reverse":
            return text[::-1]
        if tool_name == "uppercase":
            return text.upper()
        if tool_name == "word_count":
            return len(text.split())
        if tool_name == "echo":
            repeat = arguments.get("repeat", 1)
            if repeat != int(repeat) or not 1 <= repeat <= MAX_REPEAT:
                raise ToolError(f"repeat must be a whole number between 1 and {MAX_REPEAT}")
            return " ".join([text] * int(repeat))

        raise ToolError(f"Unknown tool: {tool_name}")
