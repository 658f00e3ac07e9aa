from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mcp import types
from pydantic import Field

from ..envelope import text_envelope
from ..registry import ToolRegistry
from ..validation import ToolInput

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y. %m. %d. %H:%M:%S"


class GetTimeInput(ToolInput):
    timezone: str = Field(
        description="IANA 타임존 이름 (예: Asia/Seoul, America/New_York, Europe/London)",
    )


def current_time_text(timezone: str, now: Optional[datetime] = None) -> str:
    """
    Format the current instant in `timezone`, 24-hour clock.

    Raises `ZoneInfoNotFoundError`, `ValueError` or `OSError` for unknown or
    malformed zone names.
    """
    zone = ZoneInfo(timezone)
    instant = now if now is not None else datetime.now(tz=zone)
    local = instant.astimezone(zone)
    return f"{timezone}의 현재 시간: {local.strftime(TIME_FORMAT)}"


async def _handle_get_time(args: GetTimeInput) -> types.CallToolResult:
    try:
        return text_envelope(current_time_text(args.timezone))
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.warning("get-time: invalid timezone %r (%s)", args.timezone, e)
        return text_envelope(f"오류: 유효하지 않은 타임존입니다. ({args.timezone})")


def register_tools(registry: ToolRegistry) -> None:
    registry.add_tool(
        name="get-time",
        description="타임존을 입력받아 해당 타임존의 현재 시간을 반환합니다.",
        input_model=GetTimeInput,
        handler=_handle_get_time,
    )
