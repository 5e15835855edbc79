import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cryptoquotes.db.models.refresh_control import RefreshControlRecord
from cryptoquotes.domain.ports import RefreshControlRepository
from cryptoquotes.timeutils import format_rfc3339, parse_rfc3339

logger = logging.getLogger(__name__)

LAST_MANUAL_REFRESH_KEY = "last_manual_refresh"


class RefreshControlRepo(RefreshControlRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_last_manual_refresh(self) -> Optional[datetime]:
        record = await self._session.get(RefreshControlRecord, LAST_MANUAL_REFRESH_KEY)
        if record is None:
            return None
        parsed = parse_rfc3339(record.value)
        if parsed is None:
            logger.warning("Unparseable %s value %r, treating as never refreshed", LAST_MANUAL_REFRESH_KEY, record.value)
        return parsed

    async def set_last_manual_refresh(self, when: datetime) -> None:
        value = format_rfc3339(when)
        record = await self._session.get(RefreshControlRecord, LAST_MANUAL_REFRESH_KEY)
        if record is None:
            self._session.add(RefreshControlRecord(key=LAST_MANUAL_REFRESH_KEY, value=value))
        else:
            record.value = value
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
