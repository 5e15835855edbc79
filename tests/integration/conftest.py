import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from cryptoquotes.api import deps
from cryptoquotes.api.main import app
from cryptoquotes.auth.passwords import BcryptHasher
from cryptoquotes.auth.tokens import JWTService
from cryptoquotes.config import Settings
from cryptoquotes.domain.models import PriceQuote
from cryptoquotes.infra.price.binance import BinanceProvider
from cryptoquotes.infra.price.coingecko import CoinGeckoProvider
from cryptoquotes.infra.price.registry import ProviderRegistry

TEST_SECRET = "integration-secret"


def _binance_quote(coin, currency):
    return PriceQuote(symbol=coin.symbol, currency=currency, price="45000.50", provider="binance")


def _coingecko_quote(coin, currency):
    return PriceQuote(
        symbol=coin.symbol, currency=currency, price="45010.25", provider="coingecko", timestamp="2024-06-01T12:00:00Z"
    )


@pytest.fixture()
def registry() -> ProviderRegistry:
    binance = BinanceProvider(MagicMock())
    binance.get_current_price = AsyncMock(side_effect=_binance_quote)
    coingecko = CoinGeckoProvider(MagicMock())
    coingecko.get_current_price = AsyncMock(side_effect=_coingecko_quote)
    return ProviderRegistry(binance, coingecko)


@pytest.fixture()
def resolver() -> MagicMock:
    mock = MagicMock()
    mock.validate_binance_symbol = AsyncMock(side_effect=lambda pair: pair.strip().upper())
    mock.validate_coingecko_id = AsyncMock(side_effect=lambda coin_id: coin_id.strip())
    mock.resolve_binance_pair = AsyncMock(return_value=None)
    mock.resolve_coingecko_id = AsyncMock(return_value=None)
    return mock


@pytest.fixture()
def token_service() -> JWTService:
    return JWTService(TEST_SECRET)


@pytest.fixture()
def auth_headers(token_service) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.generate(1, 'tester@example.com')}"}


@pytest.fixture()
async def client(session_factory, registry, resolver, token_service):
    settings = Settings(scheduler_enabled=False, jwt_secret=TEST_SECRET)
    refresh_lock = asyncio.Lock()
    hasher = BcryptHasher(rounds=4)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_settings] = lambda: settings
    app.dependency_overrides[deps.get_registry] = lambda: registry
    app.dependency_overrides[deps.get_coin_resolver] = lambda: resolver
    app.dependency_overrides[deps.get_refresh_lock] = lambda: refresh_lock
    app.dependency_overrides[deps.get_password_hasher] = lambda: hasher
    app.dependency_overrides[deps.get_token_service] = lambda: token_service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
