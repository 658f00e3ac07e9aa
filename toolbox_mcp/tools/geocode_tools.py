from __future__ import annotations

import logging
from typing import Any, Optional

from mcp import types
from pydantic import Field

from ..envelope import describe_error, text_envelope
from ..http_client import HttpClient
from ..registry import ToolRegistry
from ..validation import ToolInput
from . import format_number

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
USER_AGENT = "MCP-Geocode-Tool/1.0"


class GeocodeInput(ToolInput):
    address: str = Field(
        description='도시 이름 또는 주소 (예: "Seoul", "New York", "서울시 강남구")',
    )


def format_place(address: str, data: Any) -> Optional[str]:
    """
    Render the first search hit, or `None` when the search found nothing.

    Raises `KeyError`, `TypeError` or `ValueError` when a hit lacks usable
    coordinates.
    """
    if not isinstance(data, list) or not data:
        return None
    place = data[0]
    lat = format_number(float(place["lat"]))
    lon = format_number(float(place["lon"]))
    display_name = place.get("display_name") or address
    return f"주소: {display_name}\n위도: {lat}\n경도: {lon}\n좌표: ({lat}, {lon})"


async def _handle_geocode(
    http: HttpClient,
    args: GeocodeInput,
) -> types.CallToolResult:
    try:
        data = await http.get_json(
            NOMINATIM_URL,
            params={
                "q": args.address,
                "format": "jsonv2",
                "limit": 1,
                "addressdetails": 1,
            },
            headers={"User-Agent": USER_AGENT},
        )
        text = format_place(args.address, data)
    except Exception as e:
        logger.warning("geocode failed for %r: %s", args.address, describe_error(e))
        return text_envelope(
            f"오류: 주소를 조회하는 중 문제가 발생했습니다. {describe_error(e)}"
        )

    if text is None:
        return text_envelope(f"주소를 찾을 수 없습니다: {args.address}")
    return text_envelope(text)


def register_tools(registry: ToolRegistry, http: HttpClient) -> None:
    registry.add_tool(
        name="geocode",
        description="도시 이름이나 주소를 입력받아 위도와 경도 좌표를 반환합니다.",
        input_model=GeocodeInput,
        handler=lambda args: _handle_geocode(http, args),
    )
