"""Tests for CoinGeckoProvider with mocked HTTP."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from cryptoquotes.domain.models import Coin
from cryptoquotes.exceptions import ExternalServiceError
from cryptoquotes.infra.price.coingecko import CoinGeckoProvider

BTC = Coin(id=1, symbol="BTC", coingecko_id="bitcoin")


def _http(status_code: int = 200, body=None) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = body
    mock_http = MagicMock()
    mock_http.get = AsyncMock(return_value=mock_response)
    return mock_http


class TestCoinGeckoProvider:
    async def test_successful_price_fetch(self):
        mock_http = _http(body={"bitcoin": {"usd": Decimal("45000.50"), "last_updated_at": 1700000000}})
        provider = CoinGeckoProvider(http_client=mock_http)

        quote = await provider.get_current_price(BTC, "USD")

        assert quote.price == "45000.50"
        assert quote.currency == "USD"
        assert quote.provider == "coingecko"
        assert quote.timestamp == "2023-11-14T22:13:20Z"

    async def test_request_uses_lowercase_currency(self):
        mock_http = _http(body={"bitcoin": {"eur": Decimal("41000")}})
        provider = CoinGeckoProvider(http_client=mock_http)

        quote = await provider.get_current_price(BTC, "EUR")

        params = mock_http.get.call_args.kwargs["params"]
        assert params["ids"] == "bitcoin"
        assert params["vs_currencies"] == "eur"
        assert params["include_last_updated_at"] == "true"
        assert "x_cg_demo_api_key" not in params
        assert quote.timestamp == ""

    async def test_api_key_sent_when_configured(self):
        mock_http = _http(body={"bitcoin": {"usd": Decimal("1")}})
        provider = CoinGeckoProvider(http_client=mock_http, api_key="demo-key")

        await provider.get_current_price(BTC, "USD")

        assert mock_http.get.call_args.kwargs["params"]["x_cg_demo_api_key"] == "demo-key"

    async def test_small_price_keeps_plain_notation(self):
        mock_http = _http(body={"bitcoin": {"usd": Decimal("0.00000123")}})
        provider = CoinGeckoProvider(http_client=mock_http)

        quote = await provider.get_current_price(BTC, "USD")
        assert quote.price == "0.00000123"

    async def test_rate_limit_raises(self):
        provider = CoinGeckoProvider(http_client=_http(status_code=429))
        with pytest.raises(ExternalServiceError):
            await provider.get_current_price(BTC, "USD")

    async def test_unknown_id_raises(self):
        provider = CoinGeckoProvider(http_client=_http(body={}))
        with pytest.raises(ExternalServiceError):
            await provider.get_current_price(BTC, "USD")
