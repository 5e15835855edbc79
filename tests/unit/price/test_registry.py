from unittest.mock import MagicMock

from cryptoquotes.config import Settings
from cryptoquotes.infra.price.binance import BinanceProvider
from cryptoquotes.infra.price.coingecko import CoinGeckoProvider
from cryptoquotes.infra.price.registry import ProviderRegistry, build_default_registry


class TestProviderRegistry:
    def test_lookup_is_case_insensitive(self):
        binance = BinanceProvider(http_client=MagicMock())
        registry = ProviderRegistry(binance)

        assert registry.get("binance") is binance
        assert registry.get(" BINANCE ") is binance
        assert "Binance" in registry

    def test_unknown_provider_returns_none(self):
        registry = ProviderRegistry(BinanceProvider(http_client=MagicMock()))
        assert registry.get("kraken") is None
        assert registry.get("") is None

    def test_default_registry(self):
        registry = build_default_registry(MagicMock(), Settings(coingecko_api_key="k"))

        assert sorted(registry.names()) == ["binance", "coingecko"]
        assert isinstance(registry.get("binance"), BinanceProvider)
        assert isinstance(registry.get("coingecko"), CoinGeckoProvider)
