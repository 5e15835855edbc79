"""Single-coin price lookups: latest persisted quote and live provider quote."""

import logging

from cryptoquotes.domain.models import PriceQuote
from cryptoquotes.domain.ports import CoinRepository, QuoteRepository
from cryptoquotes.exceptions import (
    BadRequestError,
    CoinNotEnabledError,
    ExternalServiceError,
    ProviderNotSupportedError,
    QuoteNotFoundError,
)
from cryptoquotes.infra.price.registry import ProviderRegistry
from cryptoquotes.timeutils import Clock, format_rfc3339, utc_now

logger = logging.getLogger(__name__)


class LatestPriceService:
    def __init__(self, coin_repo: CoinRepository, quote_repo: QuoteRepository) -> None:
        self._coins = coin_repo
        self._quotes = quote_repo

    async def get(self, symbol: str, currency: str = "", provider: str = "") -> PriceQuote:
        """Most recent stored quote; empty ``currency``/``provider`` match any."""
        symbol = symbol.strip().upper()
        if not symbol:
            raise BadRequestError("symbol is required")

        if await self._coins.get_enabled_by_symbol(symbol) is None:
            raise CoinNotEnabledError(f"coin {symbol} is not enabled")

        quote = await self._quotes.get_latest(symbol, provider.strip().lower(), currency.strip().upper())
        if quote is None:
            raise QuoteNotFoundError(f"no quote for {symbol}")
        return quote


class LivePriceService:
    def __init__(self, coin_repo: CoinRepository, registry: ProviderRegistry, clock: Clock = utc_now) -> None:
        self._coins = coin_repo
        self._registry = registry
        self._clock = clock

    async def get(self, symbol: str, currency: str, provider: str) -> PriceQuote:
        symbol = symbol.strip().upper()
        currency = currency.strip().upper()
        provider_name = provider.strip().lower()
        if not symbol or not currency or not provider_name:
            raise BadRequestError("symbol, currency and provider are required")

        coin = await self._coins.get_enabled_by_symbol(symbol)
        if coin is None:
            raise CoinNotEnabledError(f"coin {symbol} is not enabled")

        price_provider = self._registry.get(provider_name)
        if price_provider is None:
            raise ProviderNotSupportedError(f"unknown provider {provider_name}")

        try:
            quote = await price_provider.get_current_price(coin, currency)
        except ExternalServiceError:
            raise
        except Exception as e:
            logger.warning("Live price %s/%s via %s failed: %s", symbol, currency, provider_name, e)
            raise ExternalServiceError(str(e)) from e

        return quote.model_copy(
            update={
                "symbol": symbol,
                "currency": currency,
                "provider": price_provider.name,
                "timestamp": quote.timestamp or format_rfc3339(self._clock()),
            }
        )
