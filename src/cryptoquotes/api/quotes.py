import math
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.api.deps import get_db
from cryptoquotes.api.schemas.quotes import QuotesPageResponse
from cryptoquotes.db.repos import QuoteRepo
from cryptoquotes.exceptions import InvalidQueryParamError
from cryptoquotes.quotes.search import QuoteSearchInput, QuoteSearchService, parse_time_flexible

router = APIRouter(prefix="/api/v1/quotes", tags=["quotes"])

DbDep = Annotated[AsyncSession, Depends(get_db)]


def _parse_float(value: Optional[str], param: str) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        parsed = float(value.strip())
    except ValueError:
        raise InvalidQueryParamError(param) from None
    if math.isnan(parsed) or math.isinf(parsed):
        raise InvalidQueryParamError(param)
    return parsed


def _parse_int(value: Optional[str], param: str) -> int:
    if value is None or not value.strip():
        return 0
    try:
        return int(value.strip())
    except ValueError:
        raise InvalidQueryParamError(param) from None


@router.get("", response_model=QuotesPageResponse)
async def search_quotes(
    db: DbDep,
    symbol: str = Query(""),
    provider: str = Query(""),
    currency: str = Query(""),
    min_price: Optional[str] = Query(None),
    max_price: Optional[str] = Query(None),
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None),
) -> QuotesPageResponse:
    """Search stored quotes, most recent first. ``from``/``to`` accept RFC 3339 or YYYY-MM-DD."""
    params = QuoteSearchInput(
        symbol=symbol,
        provider=provider,
        currency=currency,
        min_price=_parse_float(min_price, "min_price"),
        max_price=_parse_float(max_price, "max_price"),
        from_time=parse_time_flexible(from_, end_of_day=False, param="from") if from_ and from_.strip() else None,
        to_time=parse_time_flexible(to, end_of_day=True, param="to") if to and to.strip() else None,
        page=_parse_int(page, "page"),
        page_size=_parse_int(page_size, "page_size"),
    )
    result = await QuoteSearchService(QuoteRepo(db)).search(params)
    return QuotesPageResponse.model_validate(result)
