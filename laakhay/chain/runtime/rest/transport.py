"""REST transport bound to a single node URL."""

from __future__ import annotations

import logging
from typing import Any

from .http_client import HTTPClient

logger = logging.getLogger(__name__)


class RESTTransport:
    """Thin transport over HTTPClient with a fixed base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        http: HTTPClient | None = None,
    ) -> None:
        self.base_url = base_url
        self._owns_http = http is None
        self._http = http or HTTPClient(base_url=base_url, timeout=timeout)

    @property
    def http(self) -> HTTPClient:
        return self._http

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        logger.debug("GET %s params=%s", path, params)
        return await self._http.get(path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        logger.debug("POST %s body=%s", path, json_body)
        return await self._http.post(path, json_body=json_body, headers=headers)

    async def close(self) -> None:
        if self._owns_http:
            await self._http.close()
