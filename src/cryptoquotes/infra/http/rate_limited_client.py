import asyncio
import time
from urllib.parse import urlsplit

import httpx

DEFAULT_HEADERS = {"Accept": "application/json"}


class RateLimitedClient:
    """Async HTTP client with interval-based rate limiting per upstream host."""

    def __init__(self, rate_per_second: float = 10.0, timeout: float = 10.0) -> None:
        self._min_interval = 1.0 / rate_per_second if rate_per_second > 0 else 0.0
        self._last_request_time: dict[str, float] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._client = httpx.AsyncClient(timeout=timeout, headers=DEFAULT_HEADERS)

    async def _wait_for_slot(self, url: str) -> None:
        host = urlsplit(url).netloc
        lock = self._locks.setdefault(host, asyncio.Lock())
        async with lock:
            elapsed = time.monotonic() - self._last_request_time.get(host, 0.0)
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time[host] = time.monotonic()

    async def get(self, url: str, params: dict | None = None) -> httpx.Response:
        await self._wait_for_slot(url)
        return await self._client.get(url, params=params)

    async def post(self, url: str, json: dict | list | None = None) -> httpx.Response:
        await self._wait_for_slot(url)
        return await self._client.post(url, json=json)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
