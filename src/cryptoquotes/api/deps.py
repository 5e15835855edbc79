import asyncio
from typing import AsyncGenerator

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cryptoquotes.coins.resolver import CoinIdResolver
from cryptoquotes.config import Settings
from cryptoquotes.container import Container
from cryptoquotes.db.repos import CoinRepo, QuoteRepo
from cryptoquotes.domain.models import AuthContext
from cryptoquotes.domain.ports import PasswordHasher, TokenService
from cryptoquotes.exceptions import MissingTokenError
from cryptoquotes.infra.price.registry import ProviderRegistry
from cryptoquotes.refresh.engine import RefreshEngine

bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(Provide[Container.session_factory]),
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@inject
def get_settings(settings: Settings = Depends(Provide[Container.settings])) -> Settings:
    return settings


@inject
def get_registry(registry: ProviderRegistry = Depends(Provide[Container.provider_registry])) -> ProviderRegistry:
    return registry


@inject
def get_coin_resolver(resolver: CoinIdResolver = Depends(Provide[Container.coin_resolver])) -> CoinIdResolver:
    return resolver


@inject
def get_refresh_lock(lock: asyncio.Lock = Depends(Provide[Container.refresh_lock])) -> asyncio.Lock:
    return lock


@inject
def get_password_hasher(hasher: PasswordHasher = Depends(Provide[Container.password_hasher])) -> PasswordHasher:
    return hasher


@inject
def get_token_service(tokens: TokenService = Depends(Provide[Container.token_service])) -> TokenService:
    return tokens


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    """Identity from the ``Authorization: Bearer`` header. Raises MissingTokenError / InvalidTokenError."""
    if credentials is None or not credentials.credentials.strip():
        raise MissingTokenError()
    return tokens.verify(credentials.credentials.strip())


def build_refresh_engine(db: AsyncSession, registry: ProviderRegistry, settings: Settings) -> RefreshEngine:
    """RefreshEngine over SQL repositories bound to ``db``."""
    return RefreshEngine(
        coin_repo=CoinRepo(db),
        quote_repo=QuoteRepo(db),
        registry=registry,
        provider_currencies=settings.provider_currencies,
    )
