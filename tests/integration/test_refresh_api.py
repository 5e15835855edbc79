from cryptoquotes.db.repos import CoinRepo, QuoteRepo
from cryptoquotes.domain.models import Coin, QuoteFilter


async def _seed_coins(session_factory) -> None:
    async with session_factory() as session:
        await CoinRepo(session).upsert(Coin(symbol="BTC", binance_symbol="BTCUSDT", coingecko_id="bitcoin"))
        await CoinRepo(session).upsert(Coin(symbol="ETH", binance_symbol="ETHUSDT"))
        await session.commit()


class TestManualRefreshAPI:
    async def test_requires_auth(self, client):
        res = await client.post("/api/v1/job/refresh")
        assert res.status_code == 401
        assert res.json() == {"error": "missing_token"}

    async def test_refresh_then_cooldown(self, client, auth_headers, session_factory):
        await _seed_coins(session_factory)

        res = await client.post("/api/v1/job/refresh", headers=auth_headers)
        assert res.status_code == 200
        assert res.json() == {"coins_processed": 2, "quotes_saved": 3, "failed": 0, "retry_after_seconds": 0}

        async with session_factory() as session:
            quotes, total = await QuoteRepo(session).list_filter(QuoteFilter(symbol="BTC", provider="binance"))
        assert total == 1
        assert quotes[0].price == "45000.50"

        res = await client.post("/api/v1/job/refresh", headers=auth_headers)
        assert res.status_code == 429
        body = res.json()
        assert body["error"] == "cooldown_active"
        assert 1 <= body["retry_after_seconds"] <= 1200

    async def test_provider_failure_is_counted(self, client, auth_headers, session_factory, registry):
        await _seed_coins(session_factory)
        registry.get("coingecko").get_current_price.side_effect = RuntimeError("upstream down")

        res = await client.post("/api/v1/job/refresh", headers=auth_headers)

        assert res.status_code == 200
        assert res.json()["quotes_saved"] == 2
        assert res.json()["failed"] == 1
