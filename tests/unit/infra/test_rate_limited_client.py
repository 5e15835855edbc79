from unittest.mock import AsyncMock

import httpx
import pytest

from cryptoquotes.infra.http import rate_limited_client
from cryptoquotes.infra.http.rate_limited_client import RateLimitedClient


def _client(rate: float) -> RateLimitedClient:
    client = RateLimitedClient(rate_per_second=rate)
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})))
    return client


class TestRateLimitedClient:
    @pytest.fixture()
    def sleep(self, monkeypatch) -> AsyncMock:
        mock = AsyncMock()
        monkeypatch.setattr(rate_limited_client.asyncio, "sleep", mock)
        return mock

    async def test_spaces_requests_to_same_host(self, sleep):
        async with _client(rate=1.0) as client:
            await client.get("https://api.example.com/a")
            await client.get("https://api.example.com/b")

        sleep.assert_awaited_once()
        assert 0 < sleep.await_args.args[0] <= 1.0

    async def test_hosts_are_limited_independently(self, sleep):
        async with _client(rate=1.0) as client:
            await client.get("https://api.example.com/a")
            res = await client.get("https://other.example.com/a")

        assert res.status_code == 200
        sleep.assert_not_awaited()

    async def test_zero_rate_disables_limiting(self, sleep):
        async with _client(rate=0) as client:
            for _ in range(3):
                await client.get("https://api.example.com/a")

        sleep.assert_not_awaited()
