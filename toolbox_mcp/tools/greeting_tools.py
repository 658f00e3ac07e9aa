from __future__ import annotations

from typing import Literal

from mcp import types
from pydantic import Field

from ..envelope import text_envelope
from ..registry import ToolRegistry
from ..validation import ToolInput


class GreetInput(ToolInput):
    name: str = Field(description="인사할 사람의 이름")
    language: Literal["ko", "en"] = Field(
        default="en",
        description="인사 언어 (기본값: en)",
    )


def greeting(name: str, language: str = "en") -> str:
    if language == "ko":
        return f"안녕하세요, {name}님!"
    return f"Hey there, {name}! 👋 Nice to meet you!"


async def _handle_greet(args: GreetInput) -> types.CallToolResult:
    return text_envelope(greeting(args.name, args.language))


def register_tools(registry: ToolRegistry) -> None:
    registry.add_tool(
        name="greet",
        description="이름과 언어를 입력하면 인사말을 반환합니다.",
        input_model=GreetInput,
        handler=_handle_greet,
    )
