"""Tests for latest and live single-coin price lookups."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from cryptoquotes.domain.models import Coin, PriceQuote
from cryptoquotes.exceptions import (
    BadRequestError,
    CoinNotEnabledError,
    ExternalServiceError,
    ProviderNotSupportedError,
    QuoteNotFoundError,
)
from cryptoquotes.infra.price.binance import BinanceProvider
from cryptoquotes.infra.price.registry import ProviderRegistry
from cryptoquotes.quotes.prices import LatestPriceService, LivePriceService

BTC = Coin(id=1, symbol="BTC", binance_symbol="BTCUSDT")
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _coin_repo(coin: Coin | None) -> MagicMock:
    repo = MagicMock()
    repo.get_enabled_by_symbol = AsyncMock(return_value=coin)
    return repo


class TestLatestPrice:
    async def test_returns_latest(self):
        quote = PriceQuote(symbol="BTC", currency="USDT", price="45000.50", provider="binance", timestamp="2024-06-01T11:00:00Z")
        quote_repo = MagicMock()
        quote_repo.get_latest = AsyncMock(return_value=quote)

        result = await LatestPriceService(_coin_repo(BTC), quote_repo).get(" btc ", currency="usdt", provider="Binance")

        assert result == quote
        quote_repo.get_latest.assert_awaited_once_with("BTC", "binance", "USDT")

    async def test_symbol_required(self):
        with pytest.raises(BadRequestError):
            await LatestPriceService(_coin_repo(BTC), MagicMock()).get("")

    async def test_coin_not_enabled(self):
        with pytest.raises(CoinNotEnabledError):
            await LatestPriceService(_coin_repo(None), MagicMock()).get("BTC")

    async def test_no_quote(self):
        quote_repo = MagicMock()
        quote_repo.get_latest = AsyncMock(return_value=None)
        with pytest.raises(QuoteNotFoundError):
            await LatestPriceService(_coin_repo(BTC), quote_repo).get("BTC")


class TestLivePrice:
    def _registry(self, quote=None, error=None) -> tuple[ProviderRegistry, BinanceProvider]:
        provider = BinanceProvider(MagicMock())
        provider.get_current_price = AsyncMock(return_value=quote, side_effect=error)
        return ProviderRegistry(provider), provider

    async def test_fills_missing_timestamp(self):
        registry, _ = self._registry(PriceQuote(symbol="BTC", currency="USDT", price="45000.50", provider="binance"))
        service = LivePriceService(_coin_repo(BTC), registry, clock=lambda: NOW)

        quote = await service.get("btc", "usdt", "BINANCE")

        assert quote.symbol == "BTC"
        assert quote.currency == "USDT"
        assert quote.provider == "binance"
        assert quote.timestamp == "2024-06-01T12:00:00Z"

    async def test_all_params_required(self):
        registry, _ = self._registry()
        with pytest.raises(BadRequestError):
            await LivePriceService(_coin_repo(BTC), registry).get("BTC", "", "binance")

    async def test_unknown_provider(self):
        registry, _ = self._registry()
        with pytest.raises(ProviderNotSupportedError):
            await LivePriceService(_coin_repo(BTC), registry).get("BTC", "USD", "kraken")

    async def test_coin_not_enabled_checked_first(self):
        registry, provider = self._registry()
        with pytest.raises(CoinNotEnabledError):
            await LivePriceService(_coin_repo(None), registry).get("BTC", "USDT", "binance")
        provider.get_current_price.assert_not_awaited()

    async def test_provider_failure(self):
        registry, _ = self._registry(error=ExternalServiceError("binance down"))
        with pytest.raises(ExternalServiceError):
            await LivePriceService(_coin_repo(BTC), registry).get("BTC", "USDT", "binance")
