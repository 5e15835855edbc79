"""Coin creation (upsert with identifier resolution) and partial updates."""

import logging

from pydantic import BaseModel

from cryptoquotes.coins.resolver import CoinIdResolver
from cryptoquotes.domain.enums import ProviderName
from cryptoquotes.domain.models import Coin
from cryptoquotes.domain.ports import CoinRepository
from cryptoquotes.exceptions import (
    CoinNotFoundError,
    CoinNotResolvableError,
    InvalidCoinInputError,
    InvalidCoinUpdateError,
)
from cryptoquotes.infra.price.registry import ProviderRegistry

logger = logging.getLogger(__name__)

PLACEHOLDER_VALUES = {"string"}


class CoinCreateInput(BaseModel):
    symbol: str = ""
    enabled: bool | None = None
    coingecko_id: str | None = None
    binance_symbol: str | None = None


class CoinUpdateInput(BaseModel):
    enabled: bool | None = None
    coingecko_id: str | None = None
    binance_symbol: str | None = None

    def is_empty(self) -> bool:
        return (
            self.enabled is None
            and not (self.coingecko_id or "").strip()
            and not (self.binance_symbol or "").strip()
        )


def sanitize_optional(value: str | None) -> str | None:
    """Blank strings and API-doc placeholders ("string") count as absent."""
    if value is None:
        return None
    stripped = value.strip()
    if not stripped or stripped.lower() in PLACEHOLDER_VALUES:
        return None
    return stripped


class CoinService:
    def __init__(
        self,
        coin_repo: CoinRepository,
        registry: ProviderRegistry,
        resolver: CoinIdResolver | None = None,
        binance_quote_currency: str = "USDT",
    ) -> None:
        self._coins = coin_repo
        self._registry = registry
        self._resolver = resolver
        self._binance_quote_currency = binance_quote_currency.strip().upper() or "USDT"

    async def create(self, data: CoinCreateInput) -> Coin:
        symbol = data.symbol.strip().upper()
        if not symbol:
            raise InvalidCoinInputError()

        coingecko_id = sanitize_optional(data.coingecko_id)
        binance_symbol = sanitize_optional(data.binance_symbol)

        if self._resolver is not None:
            if binance_symbol:
                binance_symbol = await self._resolver.validate_binance_symbol(binance_symbol)
                if binance_symbol is None:
                    logger.info("Dropping unknown Binance pair for %s", symbol)
            if coingecko_id:
                coingecko_id = await self._resolver.validate_coingecko_id(coingecko_id)
                if coingecko_id is None:
                    logger.info("Dropping unknown CoinGecko id for %s", symbol)

        merged = Coin(symbol=symbol, enabled=True if data.enabled is None else data.enabled)
        existing = await self._coins.get_by_symbol(symbol)
        if existing is not None:
            merged.id = existing.id
            merged.coingecko_id = sanitize_optional(existing.coingecko_id)
            merged.binance_symbol = sanitize_optional(existing.binance_symbol)

        if coingecko_id:
            merged.coingecko_id = coingecko_id
        if binance_symbol:
            merged.binance_symbol = binance_symbol

        if not merged.coingecko_id and not merged.binance_symbol:
            await self._auto_resolve(merged)
            if not merged.coingecko_id and not merged.binance_symbol:
                raise CoinNotResolvableError(f"could not resolve provider ids for {symbol}")

        return await self._coins.upsert(merged)

    async def _auto_resolve(self, coin: Coin) -> None:
        if self._resolver is None:
            return
        if self._registry.get(ProviderName.BINANCE.value) is not None:
            coin.binance_symbol = await self._resolver.resolve_binance_pair(
                f"{coin.symbol}{self._binance_quote_currency}"
            )
        if self._registry.get(ProviderName.COINGECKO.value) is not None:
            coin.coingecko_id = await self._resolver.resolve_coingecko_id(coin.symbol)

    async def update(self, symbol: str, data: CoinUpdateInput) -> Coin:
        symbol = symbol.strip().upper()
        if not symbol or data.is_empty():
            raise InvalidCoinUpdateError()

        coin = await self._coins.get_by_symbol(symbol)
        if coin is None:
            raise CoinNotFoundError(f"coin {symbol} not found")

        if data.enabled is not None:
            coin.enabled = data.enabled
        if (data.coingecko_id or "").strip():
            coin.coingecko_id = data.coingecko_id.strip()
        if (data.binance_symbol or "").strip():
            coin.binance_symbol = data.binance_symbol.strip()

        return await self._coins.upsert(coin)
