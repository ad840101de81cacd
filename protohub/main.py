from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi_limiter import FastAPILimiter
from structlog import get_logger

from protohub.config import settings
from protohub.core.cache import create_redis
from protohub.core.database import async_session_maker, engine, init_db
from protohub.core.errors import setup_exception_handlers
from protohub.core.logging import setup_logging
from protohub.core.middleware import RequestLogMiddleware
from protohub.realtime.broadcaster import RealtimeBroadcaster
from protohub.routers import (
    access,
    breath,
    dining,
    health,
    homeservices,
    learning,
    mentorship,
    podcasts,
    realtime,
    stays,
    tracker,
    trends,
)
from protohub.utils.retry import retry

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()

    if settings.DB_CREATE_ALL:
        await retry(tries=5, delay=1, backoff=2)(init_db)()
        logger.info("Database tables ensured")
    if settings.SEED_ON_STARTUP:
        from protohub.seed import seed
        await seed()

    limiter_redis = None
    if settings.RATE_LIMIT_ENABLED:
        limiter_redis = create_redis()
        await FastAPILimiter.init(limiter_redis)

    broadcaster = None
    if settings.REALTIME_ENABLED:
        broadcaster = RealtimeBroadcaster(async_session_maker)
        broadcaster.start()
    app.state.broadcaster = broadcaster

    yield

    if broadcaster is not None:
        await broadcaster.stop()
    if limiter_redis is not None:
        await FastAPILimiter.close()
    await engine.dispose()
    logger.info("Shutdown complete")


app = FastAPI(title="ProtoHub API", lifespan=lifespan)
app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_exception_handlers(app)

app.include_router(health.router)
app.include_router(access.router)
app.include_router(stays.router)
app.include_router(homeservices.router)
app.include_router(tracker.router)
app.include_router(trends.router)
app.include_router(breath.router)
app.include_router(mentorship.router)
app.include_router(podcasts.router)
app.include_router(learning.router)
app.include_router(dining.router)
app.include_router(realtime.router)
