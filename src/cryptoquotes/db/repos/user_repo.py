from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.db.models.user import UserRecord
from cryptoquotes.domain.models import User
from cryptoquotes.domain.ports import UserRepository
from cryptoquotes.exceptions import EmailAlreadyRegisteredError


class UserRepo(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists_by_email(self, email: str) -> bool:
        result = await self._session.execute(select(UserRecord.id).where(UserRecord.email == email).limit(1))
        return result.scalar_one_or_none() is not None

    async def create(self, user: User) -> User:
        record = UserRecord(
            email=user.email,
            name=user.name,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        self._session.add(record)
        try:
            await self._session.flush()
        except IntegrityError:
            # lost a race with a concurrent registration for the same email
            await self._session.rollback()
            raise EmailAlreadyRegisteredError() from None
        return user.model_copy(update={"id": record.id})

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(select(UserRecord).where(UserRecord.email == email))
        record = result.scalar_one_or_none()
        return User.model_validate(record) if record else None
