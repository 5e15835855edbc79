from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.api.deps import get_db, get_password_hasher, get_settings, get_token_service
from cryptoquotes.api.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from cryptoquotes.auth.service import AuthService
from cryptoquotes.config import Settings
from cryptoquotes.db.repos import UserRepo
from cryptoquotes.domain.ports import PasswordHasher, TokenService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

DbDep = Annotated[AsyncSession, Depends(get_db)]


def _service(
    db: DbDep,
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(UserRepo(db), hasher, tokens, ttl=timedelta(minutes=settings.jwt_ttl_minutes))


AuthServiceDep = Annotated[AuthService, Depends(_service)]


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, db: DbDep, service: AuthServiceDep) -> UserResponse:
    user = await service.register(body.email, body.password, body.name)
    await db.commit()
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, service: AuthServiceDep) -> LoginResponse:
    result = await service.login(body.email, body.password)
    return LoginResponse.model_validate(result)
