"""Periodic background refresh.

Runs one cycle immediately, then one every ``interval_seconds``. Each cycle
opens its own session and holds the shared refresh lock, so it never
interleaves with a manual refresh.
"""

import asyncio
import logging
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cryptoquotes.domain.models import RefreshResult
from cryptoquotes.refresh.engine import RefreshEngine

logger = logging.getLogger(__name__)

EngineFactory = Callable[[AsyncSession], RefreshEngine]


class RefreshScheduler:
    def __init__(
        self,
        engine_factory: EngineFactory,
        session_factory: async_sessionmaker[AsyncSession],
        lock: asyncio.Lock,
        interval_seconds: float = 3600,
        timeout_seconds: float | None = 50.0,
    ) -> None:
        self._engine_factory = engine_factory
        self._session_factory = session_factory
        self._lock = lock
        self._interval = interval_seconds
        self._timeout = timeout_seconds

    async def run_once(self) -> RefreshResult:
        async with self._lock:
            async with self._session_factory() as session:
                engine = self._engine_factory(session)
                result = await engine.execute(timeout=self._timeout)
        logger.info(
            "Scheduled refresh: coins=%d saved=%d failed=%d",
            result.coins_processed,
            result.quotes_saved,
            result.failed,
        )
        return result

    async def run_forever(self) -> None:
        """Loop until cancelled. A failed cycle is logged and the loop continues."""
        logger.info("Refresh scheduler started (interval=%ss)", self._interval)
        while True:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                logger.info("Refresh scheduler cancelled")
                return
            except Exception as e:
                logger.error("Scheduled refresh failed: %s", e, exc_info=True)

            try:
                await asyncio.sleep(self._interval)
            except asyncio.CancelledError:
                logger.info("Refresh scheduler cancelled")
                return
