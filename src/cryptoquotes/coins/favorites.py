from cryptoquotes.domain.models import Coin
from cryptoquotes.domain.ports import CoinRepository, FavoritesRepository
from cryptoquotes.exceptions import BadRequestError, CoinNotFoundError


class FavoritesService:
    """Per-user favorite coins. Add and remove are idempotent."""

    def __init__(self, coin_repo: CoinRepository, favorites_repo: FavoritesRepository) -> None:
        self._coins = coin_repo
        self._favorites = favorites_repo

    async def add(self, user_id: int, symbol: str) -> Coin:
        coin = await self._require_coin(symbol)
        await self._favorites.add(user_id, coin.id)
        return coin

    async def remove(self, user_id: int, symbol: str) -> Coin:
        coin = await self._require_coin(symbol)
        await self._favorites.remove(user_id, coin.id)
        return coin

    async def list(self, user_id: int) -> list[Coin]:
        return await self._favorites.list_coins(user_id)

    async def _require_coin(self, symbol: str) -> Coin:
        symbol = symbol.strip().upper()
        if not symbol:
            raise BadRequestError()
        coin = await self._coins.get_by_symbol(symbol)
        if coin is None or coin.id is None:
            raise CoinNotFoundError(f"coin {symbol} not found")
        return coin
