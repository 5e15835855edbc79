import asyncio
import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.api.deps import (
    build_refresh_engine,
    get_current_user,
    get_db,
    get_refresh_lock,
    get_registry,
    get_settings,
)
from cryptoquotes.api.schemas.jobs import RefreshResponse
from cryptoquotes.config import Settings
from cryptoquotes.db.repos import RefreshControlRepo
from cryptoquotes.domain.models import AuthContext
from cryptoquotes.infra.price.registry import ProviderRegistry
from cryptoquotes.refresh.cooldown import CooldownGate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/job", tags=["jobs"])

DbDep = Annotated[AsyncSession, Depends(get_db)]


@router.post("/refresh", response_model=RefreshResponse)
async def manual_refresh(
    db: DbDep,
    user: AuthContext = Depends(get_current_user),
    registry: ProviderRegistry = Depends(get_registry),
    lock: asyncio.Lock = Depends(get_refresh_lock),
    settings: Settings = Depends(get_settings),
) -> RefreshResponse:
    """Run a refresh now, unless one ran within the cooldown window (429)."""
    gate = CooldownGate(
        engine=build_refresh_engine(db, registry, settings),
        control_repo=RefreshControlRepo(db),
        lock=lock,
        cooldown=timedelta(minutes=settings.refresh_cooldown_minutes),
        timeout=settings.refresh_timeout_seconds,
    )
    result = await gate.execute()
    logger.info(
        "Manual refresh by user %d: coins=%d saved=%d failed=%d",
        user.user_id,
        result.coins_processed,
        result.quotes_saved,
        result.failed,
    )
    return RefreshResponse.model_validate(result)
