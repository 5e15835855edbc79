"""Tests for RefreshEngine fan-out, counters and deadline handling."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from cryptoquotes.domain.models import Coin, PriceQuote
from cryptoquotes.exceptions import ExternalServiceError
from cryptoquotes.infra.price.binance import BinanceProvider
from cryptoquotes.infra.price.coingecko import CoinGeckoProvider
from cryptoquotes.infra.price.registry import ProviderRegistry
from cryptoquotes.refresh.engine import RefreshEngine

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
CURRENCIES = {"binance": "USDT", "coingecko": "USD"}

BTC = Coin(id=1, symbol="BTC", coingecko_id="bitcoin", binance_symbol="BTCUSDT")
ETH = Coin(id=2, symbol="ETH", binance_symbol="ETHUSDT")
DOGE = Coin(id=3, symbol="DOGE", coingecko_id="dogecoin")


def _quote(coin: Coin, currency: str, provider: str, timestamp: str = "") -> PriceQuote:
    return PriceQuote(symbol=coin.symbol, currency=currency, price="100.5", provider=provider, timestamp=timestamp)


def _providers(binance_effect=None, coingecko_effect=None) -> tuple[BinanceProvider, CoinGeckoProvider]:
    binance = BinanceProvider(MagicMock())
    binance.get_current_price = AsyncMock(
        side_effect=binance_effect or (lambda coin, cur: _quote(coin, cur, "binance"))
    )
    coingecko = CoinGeckoProvider(MagicMock())
    coingecko.get_current_price = AsyncMock(
        side_effect=coingecko_effect or (lambda coin, cur: _quote(coin, cur, "coingecko", "2024-06-01T11:59:00Z"))
    )
    return binance, coingecko


def _repos(coins: list[Coin]) -> tuple[MagicMock, MagicMock]:
    coin_repo = MagicMock()
    coin_repo.list_enabled = AsyncMock(return_value=coins)
    quote_repo = MagicMock()
    quote_repo.insert = AsyncMock()
    return coin_repo, quote_repo


def _engine(coins, registry, currencies=CURRENCIES) -> tuple[RefreshEngine, MagicMock]:
    coin_repo, quote_repo = _repos(coins)
    return RefreshEngine(coin_repo, quote_repo, registry, currencies, clock=lambda: NOW), quote_repo


class TestRefreshCounters:
    async def test_all_cells_saved(self):
        engine, quote_repo = _engine([BTC], ProviderRegistry(*_providers()))

        result = await engine.execute()

        assert result.coins_processed == 1
        assert result.quotes_saved == 2
        assert result.failed == 0
        assert quote_repo.insert.await_count == 2

    async def test_eligibility_skips_are_not_counted(self):
        binance, coingecko = _providers()
        engine, _ = _engine([BTC, ETH, DOGE], ProviderRegistry(binance, coingecko))

        result = await engine.execute()

        assert result.coins_processed == 3
        assert result.quotes_saved == 4
        assert result.failed == 0
        assert result.quotes_saved + result.failed < result.coins_processed * len(CURRENCIES)
        assert binance.get_current_price.await_count == 2
        assert coingecko.get_current_price.await_count == 2

    async def test_provider_error_isolated(self):
        binance, coingecko = _providers(binance_effect=ExternalServiceError("binance down"))
        engine, _ = _engine([BTC, ETH], ProviderRegistry(binance, coingecko))

        result = await engine.execute()

        assert result.quotes_saved == 1
        assert result.failed == 2

    async def test_unregistered_provider_counts_as_failure(self):
        binance, _ = _providers()
        engine, _ = _engine([BTC], ProviderRegistry(binance))

        result = await engine.execute()

        assert result.quotes_saved == 1
        assert result.failed == 1
        assert result.quotes_saved + result.failed == result.coins_processed * len(CURRENCIES)

    async def test_insert_error_counts_as_failure(self):
        coin_repo, quote_repo = _repos([BTC])
        quote_repo.insert = AsyncMock(side_effect=[RuntimeError("disk full"), None])
        engine = RefreshEngine(coin_repo, quote_repo, ProviderRegistry(*_providers()), CURRENCIES, clock=lambda: NOW)

        result = await engine.execute()

        assert result.quotes_saved == 1
        assert result.failed == 1

    async def test_listing_error_propagates(self):
        coin_repo, quote_repo = _repos([])
        coin_repo.list_enabled = AsyncMock(side_effect=RuntimeError("db down"))
        engine = RefreshEngine(coin_repo, quote_repo, ProviderRegistry(*_providers()), CURRENCIES)

        with pytest.raises(RuntimeError):
            await engine.execute()

    async def test_no_coins(self):
        engine, _ = _engine([], ProviderRegistry(*_providers()))
        result = await engine.execute()
        assert (result.coins_processed, result.quotes_saved, result.failed) == (0, 0, 0)


class TestQuotedAt:
    async def test_provider_timestamp_used_else_clock(self):
        engine, quote_repo = _engine([BTC], ProviderRegistry(*_providers()))

        await engine.execute()

        by_provider = {c.args[0].provider: c.args[0] for c in quote_repo.insert.await_args_list}
        assert by_provider["binance"].quoted_at == NOW
        assert by_provider["binance"].currency == "USDT"
        assert by_provider["coingecko"].quoted_at == datetime(2024, 6, 1, 11, 59, tzinfo=timezone.utc)
        assert by_provider["coingecko"].currency == "USD"
        assert by_provider["coingecko"].price == "100.5"

    async def test_unparseable_timestamp_falls_back_to_clock(self):
        _, coingecko = _providers(
            coingecko_effect=lambda coin, cur: _quote(coin, cur, "coingecko", "yesterday-ish")
        )
        engine, quote_repo = _engine([DOGE], ProviderRegistry(coingecko))

        await engine.execute()

        assert quote_repo.insert.await_args.args[0].quoted_at == NOW


class TestDeadline:
    async def test_slow_provider_fails_and_remaining_cells_skip_network(self):
        async def slow(coin, currency):
            await asyncio.sleep(1)
            return _quote(coin, currency, "binance")

        binance, coingecko = _providers(binance_effect=slow)
        engine, quote_repo = _engine([BTC, ETH], ProviderRegistry(binance, coingecko))

        result = await engine.execute(timeout=0.05)

        assert result.quotes_saved == 0
        assert result.failed == 3
        assert binance.get_current_price.await_count == 1
        assert coingecko.get_current_price.await_count == 0
        quote_repo.insert.assert_not_awaited()

    async def test_generous_deadline_changes_nothing(self):
        engine, _ = _engine([BTC], ProviderRegistry(*_providers()))
        result = await engine.execute(timeout=30)
        assert result.quotes_saved == 2

    async def test_slow_insert_counts_as_failure(self):
        async def stalled_insert(quote):
            await asyncio.sleep(2)

        engine, quote_repo = _engine([ETH], ProviderRegistry(*_providers()))
        quote_repo.insert.side_effect = stalled_insert

        loop = asyncio.get_running_loop()
        started = loop.time()
        result = await engine.execute(timeout=0.1)

        assert loop.time() - started < 1
        assert result.coins_processed == 1
        assert result.quotes_saved == 0
        assert result.failed == 1

    async def test_slow_listing_propagates_timeout(self):
        async def stalled_listing():
            await asyncio.sleep(2)
            return [BTC]

        engine, quote_repo = _engine([], ProviderRegistry(*_providers()))
        engine._coins.list_enabled = AsyncMock(side_effect=stalled_listing)

        with pytest.raises(asyncio.TimeoutError):
            await engine.execute(timeout=0.1)
        quote_repo.insert.assert_not_awaited()
