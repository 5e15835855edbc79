from decimal import Decimal
from typing import Optional

from sqlalchemy import Numeric, cast, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.db.models.quote import QuoteRecord
from cryptoquotes.domain.models import PriceQuote, Quote, QuoteFilter
from cryptoquotes.domain.ports import QuoteRepository
from cryptoquotes.timeutils import as_utc, format_rfc3339


class QuoteRepo(QuoteRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, quote: Quote) -> None:
        """Append one quote and commit it on its own, so a later failure never rolls it back."""
        self._session.add(
            QuoteRecord(
                coin_id=quote.coin_id,
                symbol=quote.symbol,
                provider=quote.provider,
                currency=quote.currency,
                price=quote.price,
                quoted_at=as_utc(quote.quoted_at),
            )
        )
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

    async def get_latest(self, symbol: str, provider: str = "", currency: str = "") -> Optional[PriceQuote]:
        stmt = select(QuoteRecord).where(QuoteRecord.symbol == symbol)
        if provider:
            stmt = stmt.where(QuoteRecord.provider == provider)
        if currency:
            stmt = stmt.where(QuoteRecord.currency == currency)

        result = await self._session.execute(
            stmt.order_by(QuoteRecord.quoted_at.desc(), QuoteRecord.id.desc()).limit(1)
        )
        record = result.scalar_one_or_none()
        if record is None:
            return None
        return PriceQuote(
            symbol=record.symbol,
            currency=record.currency,
            price=record.price,
            provider=record.provider,
            timestamp=format_rfc3339(record.quoted_at),
        )

    async def list_filter(self, quote_filter: QuoteFilter) -> tuple[list[Quote], int]:
        conditions = []
        if quote_filter.symbol:
            conditions.append(QuoteRecord.symbol == quote_filter.symbol)
        if quote_filter.provider:
            conditions.append(QuoteRecord.provider == quote_filter.provider)
        if quote_filter.currency:
            conditions.append(QuoteRecord.currency == quote_filter.currency)

        numeric_price = cast(QuoteRecord.price, Numeric(36, 18))
        if quote_filter.min_price is not None:
            conditions.append(numeric_price >= Decimal(str(quote_filter.min_price)))
        if quote_filter.max_price is not None:
            conditions.append(numeric_price <= Decimal(str(quote_filter.max_price)))
        if quote_filter.from_time is not None:
            conditions.append(QuoteRecord.quoted_at >= as_utc(quote_filter.from_time))
        if quote_filter.to_time is not None:
            conditions.append(QuoteRecord.quoted_at <= as_utc(quote_filter.to_time))

        count_q = select(func.count()).select_from(QuoteRecord).where(*conditions)
        total = (await self._session.execute(count_q)).scalar_one()

        offset = (quote_filter.page - 1) * quote_filter.page_size
        result = await self._session.execute(
            select(QuoteRecord)
            .where(*conditions)
            .order_by(QuoteRecord.quoted_at.desc(), QuoteRecord.id.desc())
            .limit(quote_filter.page_size)
            .offset(offset)
        )
        quotes = []
        for record in result.scalars().all():
            quote = Quote.model_validate(record)
            quote.quoted_at = as_utc(quote.quoted_at)
            quotes.append(quote)
        return quotes, total
