"""Tool plugin base class and data structures.

Defines the interface that all tool plugins must implement, and the
declarative parameter schema each tool advertises.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ToolError(Exception):
    """Raised by a tool implementation when it cannot produce a result."""

    pass


class ParamType(str, Enum):
    """Primitive kinds a tool parameter may declare."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


_NO_DEFAULT: Any = object()


@dataclass(frozen=True)
class ParameterSpec:
    """Declaration of a single tool parameter."""

    name: str
    type: ParamType
    description: str = ""
    required: bool = True
    default: Any = _NO_DEFAULT
    enum: tuple[Any, ...] | None = None

    @property
    def has_default(self) -> bool:
        """Whether an absent value is filled in with a default."""
        return self.default is not _NO_DEFAULT

    def to_schema(self) -> dict[str, Any]:
        """Convert to a JSON Schema property."""
        schema: dict[str, Any] = {"type": self.type.value}
        if self.description:
            schema["description"] = self.description
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.has_default:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True)
class ToolDefinition:
    """Definition of a tool provided by a plugin."""

    name: str
    description: str
    parameters: tuple[ParameterSpec, ...] = field(default_factory=tuple)

    @property
    def required(self) -> list[str]:
        """Names of the required parameters, in declaration order."""
        return [p.name for p in self.parameters if p.required]

    @property
    def input_schema(self) -> dict[str, Any]:
        """The tool's parameters as a JSON Schema object."""
        return {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.parameters},
            "required": self.required,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP tool format.

        Returns:
            Dictionary in MCP tools/list format.
        """
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class PluginBase(ABC):
    """Abstract base class for all tool plugins.

    Plugins group related tools. Their tool definitions are read once,
    when the registry is built, and must not change afterwards.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the plugin identifier."""
        pass

    @abstractmethod
    def get_tools(self) -> list[ToolDefinition]:
        """Return tool definitions provided by this plugin.

        Returns:
            List of ToolDefinition objects, in the order they are listed.
        """
        pass

    @abstractmethod
    def execute(self, tool_name: str, arguments: dict[str, Any]) -> Any:
        """Execute a tool.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Validated tool arguments.

        Returns:
            The tool's result value.

        Raises:
            ToolError: If the tool cannot produce a result.
        """
        pass
