"""One refresh pass: every enabled coin against every configured provider."""

import asyncio
import logging

from cryptoquotes.domain.enums import ProviderName
from cryptoquotes.domain.models import Coin, Quote, RefreshResult
from cryptoquotes.domain.ports import CoinRepository, QuoteRepository
from cryptoquotes.infra.price.registry import ProviderRegistry
from cryptoquotes.timeutils import Clock, as_utc, parse_rfc3339, utc_now

logger = logging.getLogger(__name__)

# Coin attribute a provider needs; coins without it are skipped for that provider.
REQUIRED_IDENTIFIER = {
    ProviderName.BINANCE.value: "binance_symbol",
    ProviderName.COINGECKO.value: "coingecko_id",
}


class DeadlineExceededError(Exception):
    pass


class RefreshEngine:
    """Fetch and persist one quote per eligible (coin, provider) cell.

    Every provider and repository call shares one deadline. Failures, including
    a call that overruns the deadline, are counted per cell and never abort the
    pass. Only a failure (or timeout) listing the enabled coins propagates.
    """

    def __init__(
        self,
        coin_repo: CoinRepository,
        quote_repo: QuoteRepository,
        registry: ProviderRegistry,
        provider_currencies: dict[str, str],
        clock: Clock = utc_now,
    ) -> None:
        self._coins = coin_repo
        self._quotes = quote_repo
        self._registry = registry
        self._provider_currencies = {
            name.strip().lower(): currency.strip().upper() for name, currency in provider_currencies.items()
        }
        self._clock = clock

    async def execute(self, timeout: float | None = None) -> RefreshResult:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout if timeout is not None else None

        remaining = _remaining(deadline)
        coins = await asyncio.wait_for(self._coins.list_enabled(), timeout=remaining)
        result = RefreshResult(coins_processed=len(coins))

        for coin in coins:
            for provider_name, currency in self._provider_currencies.items():
                if not _is_eligible(coin, provider_name):
                    continue
                try:
                    await self._refresh_cell(coin, provider_name, currency, deadline)
                except Exception as e:
                    result.failed += 1
                    reason = str(e) or type(e).__name__
                    logger.warning("Refresh %s via %s failed: %s", coin.symbol, provider_name, reason)
                else:
                    result.quotes_saved += 1

        return result

    async def _refresh_cell(self, coin: Coin, provider_name: str, currency: str, deadline: float | None) -> None:
        provider = self._registry.get(provider_name)
        if provider is None:
            raise LookupError(f"provider {provider_name} is not registered")

        remaining = _remaining(deadline)
        price = await asyncio.wait_for(provider.get_current_price(coin, currency), timeout=remaining)

        quoted_at = parse_rfc3339(price.timestamp) or as_utc(self._clock())
        quote = Quote(
            coin_id=coin.id,
            symbol=coin.symbol,
            provider=provider.name,
            currency=currency,
            price=price.price,
            quoted_at=quoted_at,
        )
        remaining = _remaining(deadline)
        await asyncio.wait_for(self._quotes.insert(quote), timeout=remaining)


def _is_eligible(coin: Coin, provider_name: str) -> bool:
    attr = REQUIRED_IDENTIFIER.get(provider_name)
    if attr is None:
        return True
    return bool((getattr(coin, attr) or "").strip())


def _remaining(deadline: float | None) -> float | None:
    if deadline is None:
        return None
    remaining = deadline - asyncio.get_running_loop().time()
    if remaining <= 0:
        raise DeadlineExceededError("refresh deadline exceeded")
    return remaining
