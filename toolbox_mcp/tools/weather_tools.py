from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Mapping

from mcp import types
from pydantic import Field, field_validator

from ..envelope import describe_error, text_envelope
from ..http_client import HttpClient
from ..registry import ToolRegistry
from ..validation import ToolInput
from . import format_number

logger = logging.getLogger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

# WMO weather interpretation codes
WEATHER_CODES: Dict[int, str] = {
    0: "맑음",
    1: "대체로 맑음",
    2: "부분적으로 흐림",
    3: "흐림",
    45: "안개",
    48: "서리 안개",
    51: "약한 이슬비",
    53: "중간 이슬비",
    55: "강한 이슬비",
    56: "약한 동결 이슬비",
    57: "강한 동결 이슬비",
    61: "약한 비",
    63: "중간 비",
    65: "강한 비",
    66: "약한 동결 비",
    67: "강한 동결 비",
    71: "약한 눈",
    73: "중간 눈",
    75: "강한 눈",
    77: "눈알",
    80: "약한 소나기",
    81: "중간 소나기",
    82: "강한 소나기",
    85: "약한 눈 소나기",
    86: "강한 눈 소나기",
    95: "천둥번개",
    96: "천둥번개와 약한 우박",
    99: "천둥번개와 강한 우박",
}

WEEKDAYS = ("월", "화", "수", "목", "금", "토", "일")


class GetWeatherInput(ToolInput):
    latitude: float = Field(ge=-90, le=90, description="위도 좌표 (-90 ~ 90)")
    longitude: float = Field(ge=-180, le=180, description="경도 좌표 (-180 ~ 180)")
    forecast_days: int = Field(
        default=7,
        ge=1,
        le=16,
        alias="forecastDays",
        description="예보 기간 (일 단위, 1~16일, 기본값: 7일)",
    )

    @field_validator("forecast_days", mode="before")
    @classmethod
    def _whole_number_days(cls, value: Any) -> Any:
        # JSON clients may send 7.0 for an integer
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


def describe_weather(code: Any) -> str:
    if code in WEATHER_CODES:
        return WEATHER_CODES[code]
    if isinstance(code, (int, float)) and not isinstance(code, bool):
        return f"코드 {format_number(code)}"
    return f"코드 {code}"


def _value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    return str(value)


def _day_label(iso_day: str) -> str:
    day = date.fromisoformat(iso_day)
    return f"{day.month}월 {day.day}일 ({WEEKDAYS[day.weekday()]})"


def format_forecast(
    latitude: float,
    longitude: float,
    forecast_days: int,
    data: Mapping[str, Any],
) -> str:
    """
    Render current conditions followed by one block per forecast day.

    At most `forecast_days` blocks are written; fewer when the response
    carries a shorter daily series. Raises `KeyError`/`TypeError`/
    `ValueError` on an unexpected response shape.
    """
    current = data["current_weather"]
    daily = data["daily"]
    days: List[str] = daily["time"]

    lines = [
        f"📍 위치: 위도 {format_number(latitude)}, 경도 {format_number(longitude)}",
        "",
        "🌡️ 현재 날씨:",
        f"  온도: {_value(current['temperature'])}°C",
        f"  날씨: {describe_weather(current['weathercode'])}",
        f"  풍속: {_value(current['windspeed'])} km/h",
        "",
        f"📅 {forecast_days}일 예보:",
    ]
    for i in range(min(forecast_days, len(days))):
        lines.extend(
            [
                "",
                f"{_day_label(days[i])}:",
                f"  최고: {_value(daily['temperature_2m_max'][i])}°C"
                f" / 최저: {_value(daily['temperature_2m_min'][i])}°C",
                f"  강수량: {_value(daily['precipitation_sum'][i])}mm",
                f"  날씨: {describe_weather(daily['weather_code'][i])}",
            ]
        )
    return "\n".join(lines) + "\n"


def forecast_params(
    latitude: float,
    longitude: float,
    forecast_days: int,
) -> Dict[str, str]:
    return {
        "latitude": format_number(latitude),
        "longitude": format_number(longitude),
        "current_weather": "true",
        "hourly": "temperature_2m,precipitation,wind_speed_10m,weather_code",
        "daily": "temperature_2m_max,temperature_2m_min,precipitation_sum,weather_code",
        "forecast_days": str(forecast_days),
        "timezone": "auto",
    }


async def _handle_get_weather(
    http: HttpClient,
    args: GetWeatherInput,
) -> types.CallToolResult:
    try:
        data = await http.get_json(
            OPEN_METEO_URL,
            params=forecast_params(args.latitude, args.longitude, args.forecast_days),
        )
        text = format_forecast(args.latitude, args.longitude, args.forecast_days, data)
    except Exception as e:
        logger.warning(
            "get-weather failed for (%s, %s): %s",
            args.latitude,
            args.longitude,
            describe_error(e),
        )
        return text_envelope(
            f"오류: 날씨 정보를 조회하는 중 문제가 발생했습니다. {describe_error(e)}"
        )
    return text_envelope(text)


def register_tools(registry: ToolRegistry, http: HttpClient) -> None:
    registry.add_tool(
        name="get-weather",
        description=(
            "위도와 경도 좌표, 예보 기간을 입력받아 해당 위치의 "
            "현재 날씨와 예보 정보를 제공합니다."
        ),
        input_model=GetWeatherInput,
        handler=lambda args: _handle_get_weather(http, args),
    )
