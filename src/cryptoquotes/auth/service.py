"""Registration and login."""

import asyncio
import logging
from datetime import timedelta

from cryptoquotes.auth.passwords import BCRYPT_MAX_BYTES
from cryptoquotes.domain.models import LoginResult, User
from cryptoquotes.domain.ports import PasswordHasher, TokenService, UserRepository
from cryptoquotes.exceptions import (
    BadRequestError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidNameError,
    InvalidPasswordError,
)
from cryptoquotes.timeutils import Clock, as_utc, utc_now

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
MIN_EMAIL_LENGTH = 5


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _check_email(email: str) -> None:
    if "@" not in email or len(email) < MIN_EMAIL_LENGTH:
        raise InvalidEmailError()


def _check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH or len(password.encode()) > BCRYPT_MAX_BYTES:
        raise InvalidPasswordError()


class AuthService:
    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        ttl: timedelta = timedelta(minutes=60),
        clock: Clock = utc_now,
    ) -> None:
        self._users = user_repo
        self._hasher = hasher
        self._tokens = tokens
        self._ttl = ttl if ttl > timedelta(0) else timedelta(minutes=60)
        self._clock = clock

    async def register(self, email: str, password: str, name: str) -> User:
        email = normalize_email(email)
        name = name.strip()
        _check_email(email)
        _check_password(password)
        if not name:
            raise InvalidNameError()

        if await self._users.exists_by_email(email):
            raise EmailAlreadyRegisteredError()

        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        user = await self._users.create(
            User(
                email=email,
                name=name,
                password_hash=password_hash,
                created_at=as_utc(self._clock()).replace(microsecond=0),
            )
        )
        logger.info("Registered user %d", user.id)
        return user

    async def login(self, email: str, password: str) -> LoginResult:
        email = normalize_email(email)
        if not email or not password:
            raise BadRequestError("email and password are required")
        _check_email(email)
        _check_password(password)

        user = await self._users.find_by_email(email)
        if user is None:
            raise InvalidCredentialsError()
        if not await asyncio.to_thread(self._hasher.verify, user.password_hash, password):
            raise InvalidCredentialsError()

        token = self._tokens.generate(user.id, user.email)
        return LoginResult(access_token=token, expires_at=as_utc(self._clock()) + self._ttl)
