import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from functools import partial

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cryptoquotes import __version__
from cryptoquotes.api.auth import router as auth_router
from cryptoquotes.api.coins import router as coins_router
from cryptoquotes.api.deps import build_refresh_engine
from cryptoquotes.api.errors import register_exception_handlers
from cryptoquotes.api.favorites import router as favorites_router
from cryptoquotes.api.jobs import router as jobs_router
from cryptoquotes.api.prices import router as prices_router
from cryptoquotes.api.quotes import router as quotes_router
from cryptoquotes.container import Container
from cryptoquotes.refresh.scheduler import RefreshScheduler

logger = logging.getLogger("cryptoquotes.api")

LOG_FORMAT = "%(asctime)s %(levelname)-5s %(name)s - %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    for noisy in ("httpx", "httpcore", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    app.state.container = container
    settings = container.settings()
    configure_logging(settings.log_level)

    scheduler_task = None
    if settings.scheduler_enabled:
        scheduler = RefreshScheduler(
            engine_factory=partial(
                build_refresh_engine,
                registry=container.provider_registry(),
                settings=settings,
            ),
            session_factory=container.session_factory(),
            lock=container.refresh_lock(),
            interval_seconds=settings.refresh_interval_seconds,
            timeout_seconds=settings.refresh_timeout_seconds,
        )
        scheduler_task = asyncio.create_task(scheduler.run_forever())

    yield

    if scheduler_task is not None:
        scheduler_task.cancel()
        with suppress(asyncio.CancelledError):
            await scheduler_task
    await container.http_client().close()
    await container.engine().dispose()


app = FastAPI(title="CryptoQuotes", version=__version__, lifespan=lifespan)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(prices_router)
app.include_router(quotes_router)
app.include_router(jobs_router)
app.include_router(coins_router)
app.include_router(favorites_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": __version__}
