from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.database import get_session
from protohub.dependencies.auth import get_current_user, get_optional_user
from protohub.dependencies.rate_limit import rate_limit
from protohub.schemas.breath import (
    BreathResult,
    BreathSampleRequest,
    BreathTestOut,
    MetabolismRequest,
    MetabolismResponse,
)
from protohub.services import breath as breath_service

logger = get_logger()
router = APIRouter(prefix="/api/breath", tags=["breath"])


@router.post("/scan", response_model=BreathResult, dependencies=[rate_limit(10, 60)])
async def scan(
    request: BreathSampleRequest,
    user: Optional[dict] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_session),
):
    result = breath_service.evaluate_breath_sample(request.audio_sample)
    logger.info("Breath sample evaluated", level=result.level.value, authenticated=user is not None)
    if user is not None:
        try:
            await breath_service.save_breath_test(db, user["id"], result, request.audio_sample, request.location)
        except Exception as e:
            logger.error("Failed to store breath test", user_id=user["id"], error=str(e), exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to store breath test")
    return result


@router.get("/history", response_model=List[BreathTestOut])
async def history(user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    try:
        return await breath_service.list_breath_history(db, user["id"])
    except Exception as e:
        logger.error("Failed to fetch breath history", user_id=user["id"], error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch breath history")


@router.post("/metabolism", response_model=MetabolismResponse)
async def metabolism(request: MetabolismRequest):
    return breath_service.metabolism(request.bac, request.weight_kg, request.sex)


@router.get("/{test_id}", response_model=BreathTestOut)
async def get_breath_test(test_id: int, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    test = await breath_service.get_owned_breath_test(db, test_id, user["id"])
    if test is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Breath test not found")
    return test
