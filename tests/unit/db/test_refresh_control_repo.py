from datetime import datetime, timezone

from cryptoquotes.db.models import RefreshControlRecord
from cryptoquotes.db.repos import RefreshControlRepo
from cryptoquotes.db.repos.refresh_control_repo import LAST_MANUAL_REFRESH_KEY


class TestRefreshControlRepo:
    async def test_never_ran(self, session):
        assert await RefreshControlRepo(session).get_last_manual_refresh() is None

    async def test_set_then_get(self, session):
        repo = RefreshControlRepo(session)
        when = datetime(2024, 5, 1, 12, 0, 30, tzinfo=timezone.utc)

        await repo.set_last_manual_refresh(when)
        assert await repo.get_last_manual_refresh() == when

        later = datetime(2024, 5, 1, 13, 0, tzinfo=timezone.utc)
        await repo.set_last_manual_refresh(later)
        assert await repo.get_last_manual_refresh() == later

    async def test_unparseable_value_treated_as_never(self, session):
        session.add(RefreshControlRecord(key=LAST_MANUAL_REFRESH_KEY, value="not-a-time"))
        await session.commit()

        assert await RefreshControlRepo(session).get_last_manual_refresh() is None
