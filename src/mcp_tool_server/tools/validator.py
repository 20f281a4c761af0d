"""Argument validation for tool calls.

Checks supplied arguments against a tool's declared parameters. Validation
is fail-fast: only the first violation is reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jsonschema import Draft202012Validator

from mcp_tool_server.tools.base import ToolDefinition

_TYPE_CHECKER = Draft202012Validator.TYPE_CHECKER

# Order matters: booleans must be named before numbers
_JSON_TYPE_NAMES = ("null", "boolean", "number", "string", "array", "object")


@dataclass(frozen=True)
class Valid:
    """Arguments passed validation."""

    arguments: dict[str, Any]


@dataclass(frozen=True)
class Invalid:
    """Arguments failed validation."""

    message: str


ValidationOutcome = Valid | Invalid


def json_type_name(value: Any) -> str:
    """Return the JSON type name of a decoded value."""
    for type_name in _JSON_TYPE_NAMES:
        if _TYPE_CHECKER.is_type(value, type_name):
            return type_name
    return type(value).__name__


def validate_arguments(tool: ToolDefinition, arguments: dict[str, Any]) -> ValidationOutcome:
    """Validate arguments against a tool's parameters.

    Required parameters are checked first, in declaration order, then the
    type of each supplied parameter. Absent optional parameters receive
    their default; undeclared arguments are dropped.

    Args:
        tool: Tool whose parameters to check against.
        arguments: Arguments supplied by the caller.

    Returns:
        Valid with the arguments to pass to the tool, or Invalid with the
        first violation found.
    """
    for param in tool.parameters:
        if param.required and param.name not in arguments:
            return Invalid(f"Missing required parameter: {param.name}")

    validated: dict[str, Any] = {}
    for param in tool.parameters:
        if param.name not in arguments:
            if param.has_default:
                validated[param.name] = param.default
            continue

        value = arguments[param.name]
        if not _TYPE_CHECKER.is_type(value, param.type.value):
            return Invalid(
                f"Invalid type for parameter '{param.name}': "
                f"expected {param.type.value}, got {json_type_name(value)}"
            )
        if param.enum is not None and value not in param.enum:
            allowed = ", ".join(repr(v) for v in param.enum)
            return Invalid(
                f"Invalid value for parameter '{param.name}': expected one of {allowed}"
            )
        validated[param.name] = value

    return Valid(validated)
