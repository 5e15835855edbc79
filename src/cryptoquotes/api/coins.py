from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.api.deps import get_coin_resolver, get_current_user, get_db, get_registry, get_settings
from cryptoquotes.api.schemas.coins import CoinCreateRequest, CoinResponse, CoinUpdateRequest
from cryptoquotes.coins.lifecycle import CoinCreateInput, CoinService, CoinUpdateInput
from cryptoquotes.coins.resolver import CoinIdResolver
from cryptoquotes.config import Settings
from cryptoquotes.db.repos import CoinRepo
from cryptoquotes.infra.price.registry import ProviderRegistry

router = APIRouter(prefix="/api/v1/coins", tags=["coins"], dependencies=[Depends(get_current_user)])

DbDep = Annotated[AsyncSession, Depends(get_db)]


def _service(
    db: DbDep,
    registry: ProviderRegistry = Depends(get_registry),
    resolver: CoinIdResolver = Depends(get_coin_resolver),
    settings: Settings = Depends(get_settings),
) -> CoinService:
    return CoinService(CoinRepo(db), registry, resolver, binance_quote_currency=settings.binance_quote_currency)


CoinServiceDep = Annotated[CoinService, Depends(_service)]


@router.post("", response_model=CoinResponse)
async def create_coin(body: CoinCreateRequest, db: DbDep, service: CoinServiceDep) -> CoinResponse:
    """Create or merge a coin, resolving provider identifiers when none are given."""
    coin = await service.create(CoinCreateInput(**body.model_dump()))
    await db.commit()
    return CoinResponse.model_validate(coin)


@router.put("/{symbol}", response_model=CoinResponse)
async def update_coin(symbol: str, body: CoinUpdateRequest, db: DbDep, service: CoinServiceDep) -> CoinResponse:
    coin = await service.update(symbol, CoinUpdateInput(**body.model_dump()))
    await db.commit()
    return CoinResponse.model_validate(coin)
