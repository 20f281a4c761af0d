"""Tool definitions, registry and argument validation."""

from mcp_tool_server.tools.base import (
    ParameterSpec,
    ParamType,
    PluginBase,
    ToolDefinition,
    ToolError,
)
from mcp_tool_server.tools.registry import DuplicateToolError, InvalidToolSchemaError, ToolRegistry
from mcp_tool_server.tools.validator import Invalid, Valid, ValidationOutcome, validate_arguments

__all__ = [
    "DuplicateToolError",
    "Invalid",
    "InvalidToolSchemaError",
    "ParamType",
    "ParameterSpec",
    "PluginBase",
    "ToolDefinition",
    "ToolError",
    "ToolRegistry",
    "Valid",
    "ValidationOutcome",
    "validate_arguments",
]
