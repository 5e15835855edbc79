from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.api.deps import get_db, get_registry
from cryptoquotes.api.schemas.prices import PriceQuoteResponse
from cryptoquotes.db.repos import CoinRepo, QuoteRepo
from cryptoquotes.infra.price.registry import ProviderRegistry
from cryptoquotes.quotes.prices import LatestPriceService, LivePriceService

router = APIRouter(prefix="/api/v1/crypto", tags=["prices"])

DbDep = Annotated[AsyncSession, Depends(get_db)]


@router.get("/price", response_model=PriceQuoteResponse)
async def get_latest_price(
    db: DbDep,
    symbol: str = Query(""),
    currency: str = Query(""),
    provider: str = Query(""),
) -> PriceQuoteResponse:
    """Most recent stored quote for an enabled coin."""
    service = LatestPriceService(CoinRepo(db), QuoteRepo(db))
    quote = await service.get(symbol, currency=currency, provider=provider)
    return PriceQuoteResponse.model_validate(quote)


@router.get("/price/live", response_model=PriceQuoteResponse)
async def get_live_price(
    db: DbDep,
    registry: ProviderRegistry = Depends(get_registry),
    symbol: str = Query(""),
    currency: str = Query(""),
    provider: str = Query(""),
) -> PriceQuoteResponse:
    """Fetch the current price straight from a provider (not persisted)."""
    service = LivePriceService(CoinRepo(db), registry)
    quote = await service.get(symbol, currency, provider)
    return PriceQuoteResponse.model_validate(quote)
