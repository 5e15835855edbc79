"""Paginated, filtered search over the quote history."""

import math
from datetime import date, datetime, time, timezone

from pydantic import BaseModel

from cryptoquotes.domain.models import QuoteFilter, QuoteItem, QuotesPage, QuotesSummary
from cryptoquotes.domain.ports import QuoteRepository
from cryptoquotes.exceptions import InvalidFiltersError, InvalidQueryParamError
from cryptoquotes.timeutils import parse_rfc3339

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100
MAX_PAGE = 10


class QuoteSearchInput(BaseModel):
    symbol: str = ""
    provider: str = ""
    currency: str = ""
    min_price: float | None = None
    max_price: float | None = None
    from_time: datetime | None = None
    to_time: datetime | None = None
    page: int = 0
    page_size: int = 0


def parse_time_flexible(value: str, end_of_day: bool = False, param: str | None = None) -> datetime:
    """Parse an RFC 3339 timestamp or a bare ``YYYY-MM-DD`` date as UTC.

    A bare date is the start of that day, or its last microsecond when
    ``end_of_day`` is set (inclusive upper bound).
    """
    param = param or ("to" if end_of_day else "from")
    value = value.strip()
    if len(value) == 10:
        try:
            day = date.fromisoformat(value)
        except ValueError:
            raise InvalidQueryParamError(param) from None
        return datetime.combine(day, time.max if end_of_day else time.min, tzinfo=timezone.utc)

    parsed = parse_rfc3339(value)
    if parsed is None:
        raise InvalidQueryParamError(param)
    return parsed


class QuoteSearchService:
    def __init__(self, quote_repo: QuoteRepository) -> None:
        self._quotes = quote_repo

    async def search(self, params: QuoteSearchInput) -> QuotesPage:
        page = params.page if params.page > 0 else 1
        page_size = params.page_size if params.page_size > 0 else DEFAULT_PAGE_SIZE
        page_size = min(page_size, MAX_PAGE_SIZE)
        if page > MAX_PAGE:
            raise InvalidFiltersError(f"page must be <= {MAX_PAGE}")

        quote_filter = QuoteFilter(
            symbol=params.symbol.strip().upper(),
            provider=params.provider.strip().lower(),
            currency=params.currency.strip().upper(),
            min_price=params.min_price,
            max_price=params.max_price,
            from_time=params.from_time,
            to_time=params.to_time,
            page=page,
            page_size=page_size,
        )
        quotes, total = await self._quotes.list_filter(quote_filter)

        total_pages = min(math.ceil(total / page_size), MAX_PAGE) if total else 0
        items = [
            QuoteItem(
                symbol=q.symbol,
                provider=q.provider,
                currency=q.currency,
                price=q.price,
                quoted_at=q.quoted_at,
            )
            for q in quotes
        ]
        return QuotesPage(
            items=items,
            summary=QuotesSummary(total_items=total, total_pages=total_pages, page=page, page_size=page_size),
        )
