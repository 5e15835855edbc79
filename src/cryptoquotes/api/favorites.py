from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.api.deps import get_current_user, get_db
from cryptoquotes.api.schemas.auth import MeResponse
from cryptoquotes.api.schemas.coins import CoinResponse, FavoriteActionResponse
from cryptoquotes.coins.favorites import FavoritesService
from cryptoquotes.db.repos import CoinRepo, FavoritesRepo
from cryptoquotes.domain.models import AuthContext

router = APIRouter(prefix="/api/v1", tags=["users"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
UserDep = Annotated[AuthContext, Depends(get_current_user)]


def _service(db: DbDep) -> FavoritesService:
    return FavoritesService(CoinRepo(db), FavoritesRepo(db))


FavoritesDep = Annotated[FavoritesService, Depends(_service)]


@router.get("/me", response_model=MeResponse)
async def me(user: UserDep) -> MeResponse:
    return MeResponse.model_validate(user)


@router.get("/users/me/favorites", response_model=list[CoinResponse])
async def list_favorites(user: UserDep, service: FavoritesDep) -> list[CoinResponse]:
    coins = await service.list(user.user_id)
    return [CoinResponse.model_validate(c) for c in coins]


@router.post("/users/me/favorites/{symbol}", response_model=FavoriteActionResponse)
async def add_favorite(symbol: str, user: UserDep, db: DbDep, service: FavoritesDep) -> FavoriteActionResponse:
    coin = await service.add(user.user_id, symbol)
    await db.commit()
    return FavoriteActionResponse(action="added", symbol=coin.symbol)


@router.delete("/users/me/favorites/{symbol}", response_model=FavoriteActionResponse)
async def remove_favorite(symbol: str, user: UserDep, db: DbDep, service: FavoritesDep) -> FavoriteActionResponse:
    coin = await service.remove(user.user_id, symbol)
    await db.commit()
    return FavoriteActionResponse(action="removed", symbol=coin.symbol)
