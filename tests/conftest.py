from datetime import date, timedelta
from typing import Any, Callable, Dict, List

import httpx
import pytest

from toolbox_mcp.http_client import HttpClient
from toolbox_mcp.main import build_toolbox


class RecordingTransport:
    """Collects outbound requests and answers them with a canned handler."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self._respond = respond

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    def client(self) -> HttpClient:
        return HttpClient(transport=httpx.MockTransport(self))


def forecast_payload(days: int, codes: Any = None) -> Dict[str, Any]:
    """Open-Meteo style body with `days` daily entries starting 2025-12-15."""
    start = date(2025, 12, 15)
    codes = codes if codes is not None else [0] * days
    return {
        "current_weather": {"temperature": 3.5, "weathercode": 1, "windspeed": 11.2},
        "daily": {
            "time": [(start + timedelta(days=i)).isoformat() for i in range(days)],
            "temperature_2m_max": [5.0 + i for i in range(days)],
            "temperature_2m_min": [-1.5 + i for i in range(days)],
            "precipitation_sum": [0.0] * days,
            "weather_code": codes,
        },
    }


@pytest.fixture
def offline_transport():
    """Transport that fails every request; tools must not reach it."""
    return RecordingTransport(lambda request: httpx.Response(503))


@pytest.fixture
def toolbox(offline_transport):
    return build_toolbox(offline_transport.client(), image_client=None)


@pytest.fixture
def make_transport():
    return RecordingTransport


@pytest.fixture
def make_forecast():
    return forecast_payload
