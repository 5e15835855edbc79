import asyncio
from datetime import timedelta

from dependency_injector import containers, providers

from cryptoquotes.auth.passwords import BcryptHasher
from cryptoquotes.auth.tokens import JWTService
from cryptoquotes.coins.resolver import CoinIdResolver
from cryptoquotes.config import Settings
from cryptoquotes.db.session import build_engine, build_session_factory
from cryptoquotes.infra.http.rate_limited_client import RateLimitedClient
from cryptoquotes.infra.price.registry import build_default_registry


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["cryptoquotes.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.http_rate_per_second,
        timeout=settings.provided.http_timeout,
    )

    provider_registry = providers.Singleton(
        build_default_registry,
        http_client=http_client,
        settings=settings,
    )

    coin_resolver = providers.Singleton(CoinIdResolver, http_client=http_client)

    password_hasher = providers.Singleton(BcryptHasher, rounds=settings.provided.bcrypt_rounds)

    token_service = providers.Singleton(
        JWTService,
        secret=settings.provided.jwt_secret,
        ttl=providers.Factory(timedelta, minutes=settings.provided.jwt_ttl_minutes),
        issuer=settings.provided.jwt_issuer,
    )

    # Shared by the manual refresh endpoint and the background scheduler.
    refresh_lock = providers.Singleton(asyncio.Lock)
