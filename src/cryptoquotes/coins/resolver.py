"""Look up and validate provider identifiers for a coin symbol against the live APIs."""

import logging

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from cryptoquotes.infra.http.rate_limited_client import RateLimitedClient
from cryptoquotes.infra.price.binance import BASE_URL as BINANCE_BASE_URL
from cryptoquotes.infra.price.binance import TICKER_PATH
from cryptoquotes.infra.price.coingecko import BASE_URL as COINGECKO_BASE_URL
from cryptoquotes.infra.price.coingecko import SIMPLE_PRICE_PATH

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/v3/search"


class CoinIdResolver:
    """Each lookup returns the identifier, or None when it is unknown upstream or unreachable."""

    def __init__(
        self,
        http_client: RateLimitedClient,
        binance_base_url: str = BINANCE_BASE_URL,
        coingecko_base_url: str = COINGECKO_BASE_URL,
    ) -> None:
        self._http = http_client
        self._binance_base_url = binance_base_url.rstrip("/")
        self._coingecko_base_url = coingecko_base_url.rstrip("/")

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=10),
        reraise=True,
    )
    async def _get_json(self, url: str, params: dict) -> dict | None:
        response = await self._http.get(url, params=params)
        if response.status_code != 200:
            logger.debug("GET %s returned %d", url, response.status_code)
            return None
        try:
            data = response.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    async def _lookup(self, url: str, params: dict) -> dict | None:
        try:
            return await self._get_json(url, params)
        except httpx.HTTPError as e:
            logger.warning("Identifier lookup %s failed: %s", url, e)
            return None

    async def resolve_binance_pair(self, pair: str) -> str | None:
        """Return the canonical trading pair if Binance quotes it."""
        pair = pair.strip().upper()
        if not pair:
            return None
        data = await self._lookup(f"{self._binance_base_url}{TICKER_PATH}", {"symbol": pair})
        if not data:
            return None
        symbol = str(data.get("symbol") or "").strip().upper()
        return symbol or None

    async def validate_binance_symbol(self, pair: str) -> str | None:
        return await self.resolve_binance_pair(pair)

    async def validate_coingecko_id(self, coin_id: str) -> str | None:
        coin_id = coin_id.strip()
        if not coin_id:
            return None
        data = await self._lookup(
            f"{self._coingecko_base_url}{SIMPLE_PRICE_PATH}",
            {"ids": coin_id, "vs_currencies": "usd"},
        )
        if not data or coin_id not in data:
            return None
        return coin_id

    async def resolve_coingecko_id(self, symbol: str) -> str | None:
        """Search CoinGecko by symbol: exact symbol match first, else the top hit."""
        query = symbol.strip()
        if not query:
            return None
        data = await self._lookup(f"{self._coingecko_base_url}{SEARCH_PATH}", {"query": query})
        if not data:
            return None

        coins = [c for c in data.get("coins") or [] if isinstance(c, dict)]
        wanted = query.lower()
        for c in coins:
            coin_id = str(c.get("id") or "").strip()
            if coin_id and str(c.get("symbol") or "").strip().lower() == wanted:
                return coin_id

        if coins:
            first = str(coins[0].get("id") or "").strip()
            return first or None
        return None
