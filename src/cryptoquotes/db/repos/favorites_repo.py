from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.db.models.coin import CoinRecord
from cryptoquotes.db.models.favorite import FavoriteRecord
from cryptoquotes.domain.models import Coin
from cryptoquotes.domain.ports import FavoritesRepository


class FavoritesRepo(FavoritesRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, user_id: int, coin_id: int) -> None:
        existing = await self._session.get(FavoriteRecord, (user_id, coin_id))
        if existing is not None:
            return
        self._session.add(FavoriteRecord(user_id=user_id, coin_id=coin_id))
        await self._session.flush()

    async def remove(self, user_id: int, coin_id: int) -> None:
        await self._session.execute(
            delete(FavoriteRecord).where(FavoriteRecord.user_id == user_id, FavoriteRecord.coin_id == coin_id)
        )
        await self._session.flush()

    async def list_coins(self, user_id: int) -> list[Coin]:
        result = await self._session.execute(
            select(CoinRecord)
            .join(FavoriteRecord, FavoriteRecord.coin_id == CoinRecord.id)
            .where(FavoriteRecord.user_id == user_id)
            .order_by(CoinRecord.symbol.asc())
        )
        return [Coin.model_validate(r) for r in result.scalars().all()]
