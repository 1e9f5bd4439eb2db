"""Async HTTP client for nodeos JSON endpoints."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

import aiohttp

from ...core.exceptions import RateLimitError, RpcError, TransportError, TransportTimeout

logger = logging.getLogger(__name__)

ResponseHook = Callable[[aiohttp.ClientResponse], "float | None | Awaitable[float | None]"]

DEFAULT_RETRY_AFTER = 60


def _parse_retry_after(value: str | None) -> int:
    """Seconds to wait from a Retry-After header (delta-seconds or HTTP-date)."""
    if not value:
        return DEFAULT_RETRY_AFTER
    value = value.strip()
    if value.isdigit():
        return int(value)
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)
    return max(0, int((when - datetime.now(UTC)).total_seconds()))


class HTTPClient:
    """Async HTTP client wrapper.

    Maps aiohttp failures onto the library's exception hierarchy: timeouts
    become TransportTimeout, HTTP 429 becomes RateLimitError (and throttles
    subsequent requests), JSON error bodies become RpcError.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []
        self._throttle_until: float | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a hook called with every response.

        A hook may return a delay in seconds; the next request waits for it.
        """
        self._response_hooks.append(hook)

    def set_throttle(self, delay: float) -> None:
        """Delay the next request by ``delay`` seconds (extends, never shortens)."""
        if delay <= 0:
            return
        until = time.time() + delay
        if self._throttle_until is None or until > self._throttle_until:
            self._throttle_until = until

    async def _wait_for_throttle(self) -> None:
        if self._throttle_until is None:
            return
        remaining = self._throttle_until - time.time()
        if remaining > 0:
            await asyncio.sleep(remaining)
        self._throttle_until = None

    async def _run_hooks(self, response: aiohttp.ClientResponse) -> None:
        for hook in self._response_hooks:
            try:
                delay = hook(response)
                if inspect.isawaitable(delay):
                    delay = await delay
            except Exception as e:
                logger.warning(f"Response hook {hook!r} failed: {e}")
                continue
            if delay:
                self.set_throttle(float(delay))

    def _url(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def _handle(self, response: aiohttp.ClientResponse, url: str) -> Any:
        await self._run_hooks(response)

        if response.status == 429:
            retry_after = _parse_retry_after(response.headers.get("Retry-After"))
            self.set_throttle(float(retry_after))
            raise RateLimitError(f"Rate limited by {url}", retry_after=retry_after)

        if response.status >= 400:
            try:
                body = await response.json(content_type=None)
            except (aiohttp.ContentTypeError, ValueError):
                body = None
            if isinstance(body, dict) and "error" in body:
                error = body.get("error") or {}
                what = error.get("what") if isinstance(error, dict) else None
                raise RpcError(
                    f"RPC error from {url}: {what or body.get('message', 'unknown error')}",
                    status_code=response.status,
                    error=error if isinstance(error, dict) else {"details": error},
                )
            response.raise_for_status()

        return await response.json(content_type=None)

    async def post(
        self,
        url: str,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST a JSON body and return the decoded JSON response."""
        url = self._url(url)
        await self._wait_for_throttle()
        try:
            async with self.session.post(url, json=json_body or {}, headers=headers) as response:
                return await self._handle(response, url)
        except TimeoutError as e:
            raise TransportTimeout(f"Request to {url} timed out", timeout=self.timeout.total) from e
        except aiohttp.ClientResponseError as e:
            raise TransportError(f"HTTP {e.status} from {url}: {e.message}", status_code=e.status) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request."""
        url = self._url(url)
        await self._wait_for_throttle()
        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                return await self._handle(response, url)
        except TimeoutError as e:
            raise TransportTimeout(f"Request to {url} timed out", timeout=self.timeout.total) from e
        except aiohttp.ClientResponseError as e:
            raise TransportError(f"HTTP {e.status} from {url}: {e.message}", status_code=e.status) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
