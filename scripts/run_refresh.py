"""Run one refresh cycle from the command line.

Usage:
    PYTHONPATH=src python scripts/run_refresh.py [--manual]

Without ``--manual`` this runs a scheduler-style cycle (no cooldown). With it,
the cycle goes through the cooldown gate and records the manual-refresh time.
"""

import argparse
import asyncio
import logging
import sys

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logger = logging.getLogger("run_refresh")


async def main(manual: bool) -> int:
    from datetime import timedelta

    from cryptoquotes.api.deps import build_refresh_engine
    from cryptoquotes.config import settings
    from cryptoquotes.db.repos import RefreshControlRepo
    from cryptoquotes.db.session import build_engine, build_session_factory
    from cryptoquotes.exceptions import CooldownActiveError
    from cryptoquotes.infra.http.rate_limited_client import RateLimitedClient
    from cryptoquotes.infra.price.registry import build_default_registry
    from cryptoquotes.refresh.cooldown import CooldownGate
    from cryptoquotes.refresh.scheduler import RefreshScheduler

    engine = build_engine(settings.database_url, echo=False)
    session_factory = build_session_factory(engine)
    lock = asyncio.Lock()

    async with RateLimitedClient(settings.http_rate_per_second, settings.http_timeout) as http:
        registry = build_default_registry(http, settings)
        try:
            if manual:
                async with session_factory() as session:
                    gate = CooldownGate(
                        engine=build_refresh_engine(session, registry, settings),
                        control_repo=RefreshControlRepo(session),
                        lock=lock,
                        cooldown=timedelta(minutes=settings.refresh_cooldown_minutes),
                        timeout=settings.refresh_timeout_seconds,
                    )
                    result = await gate.execute()
            else:
                scheduler = RefreshScheduler(
                    engine_factory=lambda s: build_refresh_engine(s, registry, settings),
                    session_factory=session_factory,
                    lock=lock,
                    timeout_seconds=settings.refresh_timeout_seconds,
                )
                result = await scheduler.run_once()
        except CooldownActiveError as e:
            print(f"Cooldown active, retry in {e.retry_after_seconds}s")
            return 2
        finally:
            await engine.dispose()

    print(f"coins={result.coins_processed} saved={result.quotes_saved} failed={result.failed}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run one quote refresh cycle")
    parser.add_argument("--manual", action="store_true", help="go through the manual-refresh cooldown")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.manual)))
