"""Manual refresh guarded by a cooldown window and the shared refresh lock."""

import asyncio
import logging
import math
from datetime import timedelta

from cryptoquotes.domain.models import ManualRefreshResult
from cryptoquotes.domain.ports import RefreshControlRepository
from cryptoquotes.exceptions import CooldownActiveError
from cryptoquotes.refresh.engine import RefreshEngine
from cryptoquotes.timeutils import Clock, as_utc, utc_now

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN = timedelta(minutes=20)


class CooldownGate:
    def __init__(
        self,
        engine: RefreshEngine,
        control_repo: RefreshControlRepository,
        lock: asyncio.Lock,
        cooldown: timedelta = DEFAULT_COOLDOWN,
        clock: Clock = utc_now,
        timeout: float | None = None,
    ) -> None:
        self._engine = engine
        self._control = control_repo
        self._lock = lock
        self._cooldown = cooldown if cooldown > timedelta(0) else DEFAULT_COOLDOWN
        self._clock = clock
        self._timeout = timeout

    async def execute(self) -> ManualRefreshResult:
        """Run one refresh unless the last manual run is within the cooldown.

        Raises CooldownActiveError (with whole seconds to wait, at least 1) when
        blocked. The last-run timestamp is written only after a successful pass.
        """
        async with self._lock:
            now = as_utc(self._clock())

            last = await self._control.get_last_manual_refresh()
            if last is not None:
                next_allowed = as_utc(last) + self._cooldown
                if now < next_allowed:
                    wait = math.ceil((next_allowed - now).total_seconds())
                    raise CooldownActiveError(max(1, wait))

            result = await self._engine.execute(timeout=self._timeout)

            try:
                await self._control.set_last_manual_refresh(now)
            except Exception:
                logger.warning("Failed to record last manual refresh time", exc_info=True)

            return ManualRefreshResult(**result.model_dump(), retry_after_seconds=0)
