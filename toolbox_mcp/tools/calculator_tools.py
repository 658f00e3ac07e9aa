from __future__ import annotations

import operator as _operator
from typing import Callable, Dict, Literal

from mcp import types
from pydantic import Field

from ..envelope import text_envelope
from ..registry import ToolRegistry
from ..validation import ToolInput
from . import Number, format_number

Operator = Literal["+", "-", "*", "/"]

ZERO_DIVISION_MESSAGE = "오류: 0으로 나눌 수 없습니다."

_OPERATIONS: Dict[str, Callable[[Number, Number], Number]] = {
    "+": _operator.add,
    "-": _operator.sub,
    "*": _operator.mul,
    "/": _operator.truediv,
}


class CalculatorInput(ToolInput):
    num1: float = Field(description="첫 번째 숫자")
    num2: float = Field(description="두 번째 숫자")
    operator: Operator = Field(description="연산자 (+, -, *, /)")


def calculate(num1: Number, num2: Number, operator: str) -> str:
    """
    Apply `operator` and format the result as `"a OP b = r"`.

    Division by zero is not an error here: it yields a fixed message instead
    of a result.
    """
    if operator == "/" and num2 == 0:
        return ZERO_DIVISION_MESSAGE
    result = _OPERATIONS[operator](num1, num2)
    return (
        f"{format_number(num1)} {operator} {format_number(num2)} = "
        f"{format_number(result)}"
    )


async def _handle_calculator(args: CalculatorInput) -> types.CallToolResult:
    return text_envelope(calculate(args.num1, args.num2, args.operator))


def register_tools(registry: ToolRegistry) -> None:
    registry.add_tool(
        name="calculator",
        description="두 개의 숫자와 연산자를 입력받아 사칙연산 결과를 반환합니다.",
        input_model=CalculatorInput,
        handler=_handle_calculator,
    )
