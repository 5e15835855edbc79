from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.db.models.coin import CoinRecord
from cryptoquotes.domain.models import Coin
from cryptoquotes.domain.ports import CoinRepository


class CoinRepo(CoinRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_enabled_by_symbol(self, symbol: str) -> Optional[Coin]:
        result = await self._session.execute(
            select(CoinRecord).where(CoinRecord.symbol == symbol, CoinRecord.enabled.is_(True))
        )
        record = result.scalar_one_or_none()
        return Coin.model_validate(record) if record else None

    async def list_enabled(self) -> list[Coin]:
        result = await self._session.execute(
            select(CoinRecord).where(CoinRecord.enabled.is_(True)).order_by(CoinRecord.symbol.asc())
        )
        return [Coin.model_validate(r) for r in result.scalars().all()]

    async def get_by_symbol(self, symbol: str) -> Optional[Coin]:
        record = await self._get_record(symbol)
        return Coin.model_validate(record) if record else None

    async def upsert(self, coin: Coin) -> Coin:
        """Insert or overwrite every field of the row keyed by ``coin.symbol``."""
        record = await self._get_record(coin.symbol)
        if record is None:
            record = CoinRecord(symbol=coin.symbol)
            self._session.add(record)
        record.enabled = coin.enabled
        record.coingecko_id = coin.coingecko_id
        record.binance_symbol = coin.binance_symbol
        await self._session.flush()
        return Coin.model_validate(record)

    async def _get_record(self, symbol: str) -> Optional[CoinRecord]:
        result = await self._session.execute(select(CoinRecord).where(CoinRecord.symbol == symbol))
        return result.scalar_one_or_none()
