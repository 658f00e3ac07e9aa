from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from .config import Settings

logger = logging.getLogger(__name__)


class UpstreamError(RuntimeError):
    """An outbound call returned a non-success status or an unusable body."""


class HttpClient:
    """
    Outbound JSON GET primitive used by the lookup tools.

    A fresh `httpx.AsyncClient` is opened per call. Tests pass a `transport`
    (e.g. `httpx.MockTransport`) to keep calls off the network.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpClient":
        return cls(timeout=settings.http_timeout)

    async def get_json(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(url, params=params, headers=headers)

        if not response.is_success:
            logger.debug("GET %s failed with status %s", url, response.status_code)
            raise UpstreamError(f"HTTP error! status: {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(f"Invalid JSON response: {exc}") from exc
