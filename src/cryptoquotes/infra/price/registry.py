"""Name-keyed lookup of the configured price providers."""

from cryptoquotes.config import Settings
from cryptoquotes.domain.ports import PriceProvider
from cryptoquotes.infra.http.rate_limited_client import RateLimitedClient
from cryptoquotes.infra.price.binance import BinanceProvider
from cryptoquotes.infra.price.coingecko import CoinGeckoProvider


class ProviderRegistry:
    """Immutable after construction; lookups are case-insensitive."""

    def __init__(self, *providers: PriceProvider) -> None:
        self._providers: dict[str, PriceProvider] = {}
        for provider in providers:
            self._providers[provider.name.strip().lower()] = provider

    def get(self, name: str) -> PriceProvider | None:
        return self._providers.get(name.strip().lower())

    def names(self) -> list[str]:
        return list(self._providers)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None


def build_default_registry(http_client: RateLimitedClient, settings: Settings) -> ProviderRegistry:
    return ProviderRegistry(
        BinanceProvider(http_client),
        CoinGeckoProvider(http_client, api_key=settings.coingecko_api_key),
    )
