"""Calculator plugin.

Provides basic arithmetic over two numbers.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any

from mcp_tool_server.tools.base import (
    ParameterSpec,
    ParamType,
    PluginBase,
    ToolDefinition,
    ToolError,
)

# Keeps integer exponentiation from running away
MAX_EXPONENT = 1000


def _divide(a: float, b: float) -> float:
    if b == 0:
        raise ToolError("Division by zero")
    return a / b


def _power(base: float, exponent: float) -> float:
    if abs(exponent) > MAX_EXPONENT:
        raise ToolError(f"Exponent must be between -{MAX_EXPONENT} and {MAX_EXPONENT}")
    if base == 0 and exponent < 0:
        raise ToolError("Zero cannot be raised to a negative power")
    try:
        result = base**exponent
    except OverflowError as e:
        raise ToolError("Result is too large") from e
    if isinstance(result, complex):
        raise ToolError("Result is not a real number")
    return result


def _binary(name: str, description: str, left: str = "a", right: str = "b") -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=description,
        parameters=(
            ParameterSpec(left, ParamType.NUMBER, "First operand"),
            ParameterSpec(right, ParamType.NUMBER, "Second operand"),
        ),
    )


class CalculatorPlugin(PluginBase):
    """Arithmetic tools: add, subtract, multiply, divide and power."""

    _OPERATIONS: dict[str, tuple[Callable[[Any, Any], Any], str, str]] = {
        "add": (operator.add, "a", "b"),
        "subtract": (operator.sub, "a", "b"),
        "multiply": (operator.mul, "a", "b"),
        "divide": (_divide, "a", "b"),
        "power": (_power, "base", "exponent"),
    }

    @property
    def name(self) -> str:
        return "calculator"

    def get_tools(self) -> list[ToolDefinition]:
        return [
            _binary("add", "Add two numbers"),
            _binary("subtract", "Subtract b from a"),
            _binary("multiply", "Multiply two numbers"),
            _binary("divide", "Divide a by b"),
            _binary("power", "Raise base to the given exponent", "base", "exponent"),
        ]

    def execute(self, tool_name: str, arguments: dict[str, Any]) -> Any:
        try:
            func, left, right = self._OPERATIONS[tool_name]
        except KeyError:
            raise ToolError(f"Unknown tool: {tool_name}") from None
        return func(arguments[left], arguments[right])
