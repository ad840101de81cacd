"""
Trend dashboard queries and the rule-based analysis that feeds it.

Growth is stored as a signed integer percentage. Live variations are applied
in place by ``vary_trends`` and are clamped to [GROWTH_MIN, GROWTH_MAX] with a
searches floor of SEARCHES_FLOOR.
"""
import random
from typing import List, Optional, Tuple

from redis.asyncio import Redis
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.cache import cached_json, invalidate
from protohub.models.trends import Trend, TrendSubmission
from protohub.realtime.manager import manager, timestamp
from protohub.schemas.trends import (
    Prediction,
    TrendOut,
    TrendSubmissionRequest,
    growth_label,
)

logger = get_logger()

GROWTH_MIN = -50
GROWTH_MAX = 500
SEARCHES_FLOOR = 10000
TRENDING_GROWTH = 50
SURGE_GROWTH = 150

COUNTRY_TRENDS = [
    {"name": "United States", "flag": "🇺🇸", "top_trend": "AI coding assistant", "searches": "2.1M", "growth": "+342%", "code": "us"},
    {"name": "United Kingdom", "flag": "🇬🇧", "top_trend": "Climate summit 2024", "searches": "1.8M", "growth": "+189%", "code": "uk"},
    {"name": "Japan", "flag": "🇯🇵", "top_trend": "New Marvel movie trailer", "searches": "1.5M", "growth": "+156%", "code": "jp"},
    {"name": "Germany", "flag": "🇩🇪", "top_trend": "World Cup qualifiers", "searches": "1.2M", "growth": "+278%", "code": "de"},
]

_rng = random.Random()


def predict(growth: int) -> Prediction:
    if growth > 100:
        return Prediction.will_grow
    if growth >= 0:
        return Prediction.will_stabilize
    return Prediction.will_fade


def summarize(title: str, category: str, growth: int, searches: int) -> str:
    outlook = {
        Prediction.will_grow: "Interest is accelerating and is expected to keep growing",
        Prediction.will_stabilize: "Interest is steady and is expected to level off",
        Prediction.will_fade: "Interest is cooling and is expected to fade",
    }[predict(growth)]
    return (
        f"'{title}' is trending in {category} with {searches:,} searches "
        f"({growth_label(growth)}). {outlook}."
    )


def analyze(trend: Trend) -> str:
    if trend.growth > SURGE_GROWTH:
        momentum = "surging"
    elif trend.growth > TRENDING_GROWTH:
        momentum = "trending"
    elif trend.growth >= 0:
        momentum = "steady"
    else:
        momentum = "declining"
    return (
        f"{trend.title} is {momentum} across {trend.countries} countries in the {trend.category} category. "
        f"{summarize(trend.title, trend.category, trend.growth, trend.searches)}"
    )


def _dump(trends) -> List[dict]:
    return [TrendOut.model_validate(t).model_dump(mode="json") for t in trends]


async def list_active_trends(db: AsyncSession) -> List[Trend]:
    result = await db.execute(select(Trend).where(Trend.is_active.is_(True)).order_by(Trend.id))
    return list(result.scalars().all())


async def list_trends(
    db: AsyncSession,
    cache: Optional[Redis] = None,
    category: Optional[str] = None,
    region: Optional[str] = None,
) -> List[dict]:
    # Category takes precedence over region, "all"/"global" mean no filter
    if category and category != "all":
        key, clause = f"trends:category:{category}", Trend.category == category
    elif region and region != "global":
        key, clause = f"trends:region:{region}", Trend.region == region
    else:
        key, clause = "trends:all", None

    async def load():
        query = select(Trend).where(Trend.is_active.is_(True))
        if clause is not None:
            query = query.where(clause)
        result = await db.execute(query.order_by(Trend.id))
        return _dump(result.scalars().all())
    return await cached_json(cache, key, load)


async def get_trend(db: AsyncSession, trend_id: int) -> Optional[Trend]:
    return await db.get(Trend, trend_id)


async def generate_insights(db: AsyncSession) -> dict:
    trends = await list_active_trends(db)
    top = sorted(trends, key=lambda t: t.searches, reverse=True)[:5]
    return {
        "predictions": [{"title": t.title, "status": predict(t.growth).value} for t in top],
        "opportunities": [
            {
                "title": t.title,
                "description": f"Rising interest in {t.category}: {growth_label(t.growth)} growth",
            }
            for t in trends
            if t.growth > TRENDING_GROWTH
        ],
    }


def compute_metrics(trends: List[Trend], rng: Optional[random.Random] = None) -> dict:
    rng = rng or _rng
    return {
        "total_searches": sum(t.searches for t in trends),
        "active_users": rng.randint(1000, 1499),
        "trending_now": sum(1 for t in trends if t.growth > TRENDING_GROWTH),
        "timestamp": timestamp(),
    }


async def vary_trends(
    db: AsyncSession,
    growth_spread: float,
    search_spread: int,
    rng: Optional[random.Random] = None,
) -> List[Trend]:
    """Apply a random walk of +/- spread to every active trend and persist it."""
    rng = rng or _rng
    trends = await list_active_trends(db)
    for trend in trends:
        growth = trend.growth + rng.uniform(-growth_spread, growth_spread)
        trend.growth = int(round(max(GROWTH_MIN, min(GROWTH_MAX, growth))))
        trend.searches = max(SEARCHES_FLOOR, trend.searches + rng.randint(-search_spread, search_spread))
        trend.prediction = predict(trend.growth).value
    await db.commit()
    for trend in trends:
        await db.refresh(trend)
    return trends


async def refresh_trends(db: AsyncSession, cache: Optional[Redis] = None, rng: Optional[random.Random] = None) -> List[Trend]:
    trends = await vary_trends(db, growth_spread=10, search_spread=50000, rng=rng)
    await invalidate(cache, "trends:*")
    await manager.broadcast({"type": "trendsUpdate", "data": _dump(trends), "timestamp": timestamp()})
    logger.info("Trends refreshed", count=len(trends))
    return trends


async def create_trend_from_submission(
    db: AsyncSession,
    request: TrendSubmissionRequest,
    cache: Optional[Redis] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[TrendSubmission, Trend]:
    rng = rng or _rng
    submission = TrendSubmission(
        topic=request.topic,
        category=request.category.value,
        region=request.region.value,
        description=request.description,
    )
    db.add(submission)

    searches = rng.randint(50000, 549999)
    growth = rng.randint(50, 249)
    trend = Trend(
        title=request.topic,
        category=request.category.value,
        searches=searches,
        growth=growth,
        countries=rng.randint(5, 24),
        ai_summary=summarize(request.topic, request.category.value, growth, searches),
        prediction=predict(growth).value,
        region=request.region.value,
        is_active=True,
    )
    db.add(trend)
    await db.commit()
    await db.refresh(submission)
    await db.refresh(trend)

    await invalidate(cache, "trends:*")
    await manager.broadcast({
        "type": "newTrend",
        "trend": TrendOut.model_validate(trend).model_dump(mode="json"),
        "message": f'New trend "{trend.title}" added to {trend.category} category',
        "timestamp": timestamp(),
    })
    logger.info("Trend created from submission", submission_id=submission.id, trend_id=trend.id)
    return submission, trend


async def refresh_summary(db: AsyncSession, trend: Trend, cache: Optional[Redis] = None) -> Trend:
    trend.ai_summary = summarize(trend.title, trend.category, trend.growth, trend.searches)
    trend.prediction = predict(trend.growth).value
    await db.commit()
    await db.refresh(trend)
    await invalidate(cache, "trends:*")
    return trend
