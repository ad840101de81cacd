import asyncio
import random
from typing import Awaitable, Callable, List, Optional

from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import async_sessionmaker
from structlog import get_logger

from protohub.config import settings
from protohub.core.cache import create_redis, invalidate
from protohub.realtime.manager import ConnectionManager, manager, timestamp
from protohub.schemas.trends import TrendOut
from protohub.services import trends as trend_service

logger = get_logger()

ACTIVITY_MESSAGES = [
    "New emerging trend detected in technology sector",
    "Search spike observed for sustainable energy topics",
    "Regional trend shift in entertainment category",
    "Breaking news driving search volume increases",
    "Viral content spreading across social platforms",
]
SPIKE_ACTIVITY_CHANCE = 0.3


def default_cache() -> Optional[Redis]:
    return create_redis() if settings.CACHE_ENABLED else None


class RealtimeBroadcaster:
    """
    Periodic trend, metrics and activity pushes to every ``/ws`` client.

    Each tick runs once on start and then every configured period. A failing
    tick is logged and the loop keeps going.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        connections: Optional[ConnectionManager] = None,
        rng: Optional[random.Random] = None,
        cache_factory: Callable[[], Optional[Redis]] = default_cache,
    ):
        self.session_factory = session_factory
        self.connections = connections or manager
        self.rng = rng or random.Random()
        self.cache_factory = cache_factory
        self._tasks: List[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def start(self) -> None:
        if self.running:
            return
        schedule = [
            ("trends", self.broadcast_trends, settings.TRENDS_BROADCAST_SECONDS),
            ("metrics", self.broadcast_metrics, settings.METRICS_BROADCAST_SECONDS),
            ("activity", self.broadcast_activity, settings.ACTIVITY_BROADCAST_SECONDS),
        ]
        self._tasks = [
            asyncio.create_task(self._every(name, tick, period), name=f"realtime-{name}")
            for name, tick, period in schedule
        ]
        logger.info(
            "Realtime updates started",
            trends_seconds=settings.TRENDS_BROADCAST_SECONDS,
            metrics_seconds=settings.METRICS_BROADCAST_SECONDS,
            activity_seconds=settings.ACTIVITY_BROADCAST_SECONDS,
        )

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("Realtime updates stopped")

    async def _every(self, name: str, tick: Callable[[], Awaitable[None]], period: float) -> None:
        while True:
            try:
                await tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("Realtime tick failed", tick=name, error=str(e), exc_info=True)
            await asyncio.sleep(period)

    async def broadcast_trends(self) -> None:
        async with self.session_factory() as db:
            trends = await trend_service.vary_trends(db, growth_spread=5, search_spread=25000, rng=self.rng)
        await self._invalidate_trend_cache()
        payload = [TrendOut.model_validate(t).model_dump(mode="json") for t in trends]
        await self.connections.broadcast({"type": "trendsUpdate", "data": payload, "timestamp": timestamp()})

        for trend in payload:
            if trend["growth"] > trend_service.SURGE_GROWTH:
                await self.connections.broadcast({
                    "type": "trendSurge",
                    "trend": trend,
                    "message": f"{trend['title']} is experiencing a surge with {trend['growth_label']} growth!",
                    "timestamp": timestamp(),
                })
            if self.rng.random() < SPIKE_ACTIVITY_CHANCE:
                await self.connections.broadcast({
                    "type": "activityUpdate",
                    "data": {
                        "type": "search_spike",
                        "message": f"{trend['title']} searches changed by {abs(trend['growth'])}%",
                        "category": trend["category"],
                        "region": trend["region"],
                        "timestamp": timestamp(),
                    },
                })
        logger.info("Trend update broadcast", trends=len(payload), clients=self.connections.connection_count)

    async def _invalidate_trend_cache(self) -> None:
        cache = self.cache_factory()
        if cache is None:
            return
        try:
            await invalidate(cache, "trends:*")
        finally:
            await cache.aclose()

    async def broadcast_metrics(self) -> None:
        async with self.session_factory() as db:
            trends = await trend_service.list_active_trends(db)
        metrics = trend_service.compute_metrics(trends, rng=self.rng)
        await self.connections.broadcast({"type": "metricsUpdate", "data": metrics})

    async def broadcast_activity(self) -> None:
        await self.connections.broadcast({
            "type": "activityUpdate",
            "data": {
                "message": self.rng.choice(ACTIVITY_MESSAGES),
                "timestamp": timestamp(),
                "type": "general_activity",
            },
        })
