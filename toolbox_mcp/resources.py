from __future__ import annotations

import json
import time
from datetime import datetime, timezone
from typing import Any, Dict, List

import psutil

from .registry import ResourceRegistry, ResourceSupplier

SERVER_INFO_URI = "server://info"

# Keep in step with the tools registered in `main.build_toolbox`.
TOOL_CATALOG: List[Dict[str, str]] = [
    {"name": "greet", "description": "인사말 반환"},
    {"name": "calculator", "description": "사칙연산"},
    {"name": "get-time", "description": "타임존별 현재 시간"},
    {"name": "geocode", "description": "주소를 좌표로 변환"},
    {"name": "get-weather", "description": "날씨 정보"},
    {"name": "generate-image", "description": "AI 이미지 생성"},
]


def process_uptime() -> float:
    """Seconds since this process was started."""
    return max(0.0, time.time() - psutil.Process().create_time())


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def server_info(name: str, version: str) -> Dict[str, Any]:
    return {
        "server": {
            "name": name,
            "version": version,
            "timestamp": _utc_timestamp(),
            "uptime": process_uptime(),
        },
        "tools": [dict(entry) for entry in TOOL_CATALOG],
        "totalTools": len(TOOL_CATALOG),
    }


def _server_info_supplier(name: str, version: str) -> ResourceSupplier:
    async def supply() -> str:
        return json.dumps(server_info(name, version), indent=2, ensure_ascii=False)

    return supply


def register_resources(registry: ResourceRegistry, name: str, version: str) -> None:
    registry.add_resource(
        name="server-info",
        uri=SERVER_INFO_URI,
        title="서버 정보",
        description="현재 서버 정보와 사용 가능한 도구 목록을 반환합니다.",
        mime_type="application/json",
        supplier=_server_info_supplier(name, version),
    )
