"""CoinGecko simple-price provider."""

from datetime import datetime, timezone
from decimal import Decimal

import httpx

from cryptoquotes.domain.enums import ProviderName
from cryptoquotes.domain.models import Coin, PriceQuote
from cryptoquotes.domain.ports import PriceProvider
from cryptoquotes.exceptions import ExternalServiceError
from cryptoquotes.infra.http.rate_limited_client import RateLimitedClient
from cryptoquotes.timeutils import format_rfc3339

BASE_URL = "https://api.coingecko.com"
SIMPLE_PRICE_PATH = "/api/v3/simple/price"


class CoinGeckoProvider(PriceProvider):
    """Current price from /simple/price, with the upstream last-updated time."""

    def __init__(self, http_client: RateLimitedClient, api_key: str = "", base_url: str = BASE_URL) -> None:
        self._http = http_client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return ProviderName.COINGECKO.value

    async def get_current_price(self, coin: Coin, currency: str) -> PriceQuote:
        coin_id = (coin.coingecko_id or "").strip()
        if not coin_id:
            raise ExternalServiceError(f"coingecko: no id for {coin.symbol}")

        vs_currency = currency.lower()
        params: dict[str, str] = {
            "ids": coin_id,
            "vs_currencies": vs_currency,
            "include_last_updated_at": "true",
        }
        if self._api_key:
            params["x_cg_demo_api_key"] = self._api_key

        try:
            response = await self._http.get(f"{self._base_url}{SIMPLE_PRICE_PATH}", params=params)
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"coingecko: request for {coin_id} failed: {e}") from e

        if response.status_code == 429:
            raise ExternalServiceError(f"coingecko: rate limited for {coin_id}")
        if response.status_code != 200:
            raise ExternalServiceError(f"coingecko: HTTP {response.status_code} for {coin_id}")

        try:
            data = response.json(parse_float=Decimal)
        except ValueError as e:
            raise ExternalServiceError(f"coingecko: malformed body for {coin_id}") from e

        entry = data.get(coin_id) if isinstance(data, dict) else None
        if not isinstance(entry, dict) or entry.get(vs_currency) is None:
            raise ExternalServiceError(f"coingecko: no {vs_currency} price for {coin_id}")

        price = Decimal(str(entry[vs_currency]))
        timestamp = ""
        last_updated = entry.get("last_updated_at")
        if last_updated:
            timestamp = format_rfc3339(datetime.fromtimestamp(int(last_updated), tz=timezone.utc))

        return PriceQuote(
            symbol=coin.symbol,
            currency=currency.upper(),
            price=format(price, "f"),
            provider=self.name,
            timestamp=timestamp,
        )
