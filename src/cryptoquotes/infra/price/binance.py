"""Binance spot ticker provider."""

import httpx

from cryptoquotes.domain.enums import ProviderName
from cryptoquotes.domain.models import Coin, PriceQuote
from cryptoquotes.domain.ports import PriceProvider
from cryptoquotes.exceptions import ExternalServiceError
from cryptoquotes.infra.http.rate_limited_client import RateLimitedClient

BASE_URL = "https://api.binance.com"
TICKER_PATH = "/api/v3/ticker/price"


class BinanceProvider(PriceProvider):
    """Current spot price from the public ticker. Binance reports no quote time."""

    def __init__(self, http_client: RateLimitedClient, base_url: str = BASE_URL) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return ProviderName.BINANCE.value

    async def get_current_price(self, coin: Coin, currency: str) -> PriceQuote:
        pair = (coin.binance_symbol or "").strip().upper()
        if not pair:
            raise ExternalServiceError(f"binance: no trading pair for {coin.symbol}")

        try:
            response = await self._http.get(f"{self._base_url}{TICKER_PATH}", params={"symbol": pair})
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"binance: request for {pair} failed: {e}") from e

        if response.status_code != 200:
            raise ExternalServiceError(f"binance: HTTP {response.status_code} for {pair}")

        try:
            data = response.json()
        except ValueError as e:
            raise ExternalServiceError(f"binance: malformed body for {pair}") from e

        price = data.get("price") if isinstance(data, dict) else None
        if not isinstance(price, str) or not price:
            raise ExternalServiceError(f"binance: missing price for {pair}")

        return PriceQuote(
            symbol=coin.symbol,
            currency=currency.upper(),
            price=price,
            provider=self.name,
        )
