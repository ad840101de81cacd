from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.cache import get_cache
from protohub.core.database import get_session
from protohub.dependencies.auth import require_role
from protohub.dependencies.rate_limit import rate_limit
from protohub.schemas.trends import (
    AnalysisOut,
    CountryTrend,
    InsightsOut,
    TrendOut,
    TrendSubmissionRequest,
    TrendSubmissionResponse,
)
from protohub.services import trends as trend_service

logger = get_logger()
router = APIRouter(prefix="/api", tags=["trends"])


async def _trends(db: AsyncSession, cache: Optional[Redis], category: Optional[str], region: Optional[str]):
    try:
        return await trend_service.list_trends(db, cache, category=category, region=region)
    except Exception as e:
        logger.error("Failed to fetch trends", category=category, region=region, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch trends")


@router.get("/trends", response_model=List[TrendOut], dependencies=[rate_limit(30, 60)])
async def list_trends(
    category: Optional[str] = None,
    region: Optional[str] = None,
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    return await _trends(db, cache, category, region)


@router.get("/trends/enhanced", response_model=List[TrendOut], dependencies=[rate_limit(30, 60)])
async def list_enhanced_trends(
    category: Optional[str] = None,
    region: Optional[str] = None,
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    return await _trends(db, cache, category, region)


@router.get("/trends/countries", response_model=List[CountryTrend])
async def country_trends():
    return trend_service.COUNTRY_TRENDS


@router.get("/insights", response_model=InsightsOut)
async def insights(db: AsyncSession = Depends(get_session)):
    try:
        return await trend_service.generate_insights(db)
    except Exception as e:
        logger.error("Failed to generate insights", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate insights")


@router.post("/trends/submit", response_model=TrendSubmissionResponse, dependencies=[rate_limit(5, 60)])
async def submit_trend(
    request: TrendSubmissionRequest,
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    try:
        submission, _ = await trend_service.create_trend_from_submission(db, request, cache)
        return {"message": "Trend submitted successfully", "submission_id": submission.id}
    except Exception as e:
        logger.error("Trend submission failed", topic=request.topic, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to submit trend")


@router.post("/trends/refresh")
async def refresh_trends(
    user: dict = Depends(require_role("admin")),
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    try:
        trends = await trend_service.refresh_trends(db, cache)
        logger.info("Manual trend refresh", user_id=user.get("id"), count=len(trends))
        return {"message": "Trends refreshed successfully", "count": len(trends)}
    except Exception as e:
        logger.error("Trend refresh failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to refresh trends")


@router.post("/trends/{trend_id}/analyze", response_model=AnalysisOut)
async def analyze_trend(trend_id: int, db: AsyncSession = Depends(get_session)):
    trend = await trend_service.get_trend(db, trend_id)
    if trend is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trend not found")
    return {"analysis": trend_service.analyze(trend)}


@router.post("/trends/{trend_id}/refresh-summary")
async def refresh_trend_summary(
    trend_id: int,
    user: dict = Depends(require_role("admin")),
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    trend = await trend_service.get_trend(db, trend_id)
    if trend is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trend not found")
    try:
        trend = await trend_service.refresh_summary(db, trend, cache)
    except Exception as e:
        logger.error("Summary refresh failed", trend_id=trend_id, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to refresh summary")
    logger.info("Trend summary refreshed", trend_id=trend_id, user_id=user.get("id"))
    return {
        "success": True,
        "trend": TrendOut.model_validate(trend).model_dump(mode="json"),
        "message": "Summary refreshed successfully",
    }
