"""Capability contracts consumed by the use cases.

SQL repositories in ``cryptoquotes.db.repos`` and HTTP providers in
``cryptoquotes.infra.price`` implement these; the core never imports them directly.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from cryptoquotes.domain.models import AuthContext, Coin, PriceQuote, Quote, QuoteFilter, User


class PriceProvider(ABC):
    """An external price source."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Lowercase provider key, e.g. ``"binance"``."""

    @abstractmethod
    async def get_current_price(self, coin: Coin, currency: str) -> PriceQuote:
        """Fetch the current price of ``coin`` in ``currency``. Raises ExternalServiceError."""


class CoinRepository(ABC):
    @abstractmethod
    async def get_enabled_by_symbol(self, symbol: str) -> Coin | None:
        """Coin by symbol if it exists and is enabled."""

    @abstractmethod
    async def list_enabled(self) -> list[Coin]:
        """All enabled coins ordered by symbol."""

    @abstractmethod
    async def get_by_symbol(self, symbol: str) -> Coin | None: ...

    @abstractmethod
    async def upsert(self, coin: Coin) -> Coin:
        """Insert or update by symbol; returns the stored coin."""


class QuoteRepository(ABC):
    @abstractmethod
    async def insert(self, quote: Quote) -> None:
        """Persist one quote as an independent, committed write."""

    @abstractmethod
    async def get_latest(self, symbol: str, provider: str = "", currency: str = "") -> PriceQuote | None:
        """Most recent quote by ``quoted_at``; empty provider/currency match any."""

    @abstractmethod
    async def list_filter(self, quote_filter: QuoteFilter) -> tuple[list[Quote], int]:
        """One page of matching quotes (most recent first) and the total match count."""


class UserRepository(ABC):
    @abstractmethod
    async def exists_by_email(self, email: str) -> bool: ...

    @abstractmethod
    async def create(self, user: User) -> User: ...

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None: ...


class FavoritesRepository(ABC):
    @abstractmethod
    async def add(self, user_id: int, coin_id: int) -> None:
        """Idempotent."""

    @abstractmethod
    async def remove(self, user_id: int, coin_id: int) -> None:
        """Idempotent."""

    @abstractmethod
    async def list_coins(self, user_id: int) -> list[Coin]: ...


class RefreshControlRepository(ABC):
    @abstractmethod
    async def get_last_manual_refresh(self) -> datetime | None:
        """UTC instant of the last successful manual refresh, or None if it never ran."""

    @abstractmethod
    async def set_last_manual_refresh(self, when: datetime) -> None: ...


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str: ...

    @abstractmethod
    def verify(self, password_hash: str, password: str) -> bool: ...


class TokenService(ABC):
    @abstractmethod
    def generate(self, user_id: int, email: str) -> str: ...

    @abstractmethod
    def verify(self, token: str) -> AuthContext:
        """Decode and validate ``token``. Raises InvalidTokenError."""
