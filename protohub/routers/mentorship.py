from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.cache import get_cache
from protohub.core.database import get_session
from protohub.dependencies.auth import get_current_user, require_role
from protohub.dependencies.rate_limit import rate_limit
from protohub.schemas.mentorship import (
    ArtistSyncCreate,
    ArtistSyncOut,
    AssignMentorRequest,
    AuditionRequest,
    AuditionResult,
    ChallengeOut,
    CollaborationOut,
    InspirationItemOut,
    JourneyProgressUpdate,
    JourneyStepOut,
    MentorOut,
    UserJourneyStepOut,
    UserMentorOut,
)
from protohub.services import mentorship as mentorship_service
from protohub.services.mentorship import MentorshipError

logger = get_logger()
router = APIRouter(prefix="/api", tags=["mentorship"])


def _user_mentor(assignment, mentor) -> dict:
    return {
        "mentor": mentor,
        "progress": assignment.progress,
        "current_message": assignment.current_message,
        "assigned_at": assignment.created_at,
    }


async def _artist_sync_or_404(db: AsyncSession, sync_id: int):
    sync = await mentorship_service.get_artist_sync(db, sync_id)
    if sync is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Artist sync not found")
    return sync


@router.get("/mentors", response_model=List[MentorOut], dependencies=[rate_limit(30, 60)])
async def list_mentors(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    try:
        return await mentorship_service.list_mentors(db, cache)
    except Exception as e:
        logger.error("Failed to fetch mentors", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch mentors")


@router.get("/mentors/{mentor_id}", response_model=MentorOut)
async def get_mentor(mentor_id: int, db: AsyncSession = Depends(get_session)):
    mentor = await mentorship_service.get_mentor(db, mentor_id)
    if mentor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentor not found")
    return mentor


@router.get("/me/mentor", response_model=Optional[UserMentorOut])
async def my_mentor(user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    found = await mentorship_service.get_user_mentor(db, user["id"])
    return _user_mentor(*found) if found else None


@router.post("/me/mentor", response_model=UserMentorOut, status_code=status.HTTP_201_CREATED)
async def assign_mentor(
    request: AssignMentorRequest,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    try:
        return _user_mentor(*await mentorship_service.assign_mentor(db, user["id"], request.mentor_id))
    except MentorshipError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/journey", response_model=List[JourneyStepOut])
async def list_journey(db: AsyncSession = Depends(get_session)):
    return await mentorship_service.list_journey_steps(db)


@router.get("/me/journey", response_model=List[UserJourneyStepOut])
async def my_journey(user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    return await mentorship_service.list_user_journey(db, user["id"])


@router.put("/me/journey/{step_id}", response_model=UserJourneyStepOut)
async def update_my_journey_step(
    step_id: int,
    request: JourneyProgressUpdate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    try:
        await mentorship_service.update_user_journey_step(db, user["id"], step_id, request)
    except MentorshipError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    journey = await mentorship_service.list_user_journey(db, user["id"])
    return next(step for step in journey if step["id"] == step_id)


@router.get("/inspiration", response_model=List[InspirationItemOut])
async def list_inspiration(db: AsyncSession = Depends(get_session)):
    return await mentorship_service.list_inspiration(db)


@router.get("/collaborations", response_model=List[CollaborationOut])
async def list_collaborations(db: AsyncSession = Depends(get_session)):
    return await mentorship_service.list_collaborations(db)


@router.get("/challenges", response_model=List[ChallengeOut])
async def list_challenges(db: AsyncSession = Depends(get_session)):
    return await mentorship_service.list_challenges(db)


@router.post("/audition/submit", response_model=AuditionResult, dependencies=[rate_limit(10, 60)])
async def submit_audition(request: AuditionRequest, db: AsyncSession = Depends(get_session)):
    try:
        return await mentorship_service.blind_audition(db, request.lyrics)
    except Exception as e:
        logger.error("Blind audition failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to process audition")


@router.get("/artist-syncs", response_model=List[ArtistSyncOut])
async def list_artist_syncs(
    sync_status: Optional[str] = Query(None, alias="status"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_session),
):
    return await mentorship_service.list_artist_syncs(db, sync_status=sync_status, limit=limit)


@router.get("/artist-syncs/{sync_id}", response_model=ArtistSyncOut)
async def get_artist_sync(sync_id: int, db: AsyncSession = Depends(get_session)):
    return await _artist_sync_or_404(db, sync_id)


@router.post("/artist-syncs", response_model=ArtistSyncOut, status_code=status.HTTP_201_CREATED)
async def create_artist_sync(
    request: ArtistSyncCreate,
    user: dict = Depends(require_role("admin")),
    db: AsyncSession = Depends(get_session),
):
    existing = await mentorship_service.find_artist_sync(db, request.source.value, request.source_id)
    if existing is not None:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "detail": "This artist is already being synced",
                "existing_sync": ArtistSyncOut.model_validate(existing).model_dump(mode="json"),
            },
        )
    return await mentorship_service.create_artist_sync(db, request)


@router.post("/artist-syncs/{sync_id}/refresh", response_model=ArtistSyncOut)
async def refresh_artist_sync(
    sync_id: int,
    user: dict = Depends(require_role("admin")),
    db: AsyncSession = Depends(get_session),
):
    sync = await _artist_sync_or_404(db, sync_id)
    return await mentorship_service.refresh_artist_sync(db, sync)


@router.post("/artist-syncs/{sync_id}/link/{mentor_id}", response_model=ArtistSyncOut)
async def link_artist_sync(
    sync_id: int,
    mentor_id: int,
    user: dict = Depends(require_role("admin")),
    db: AsyncSession = Depends(get_session),
):
    sync = await _artist_sync_or_404(db, sync_id)
    mentor = await mentorship_service.get_mentor(db, mentor_id)
    if mentor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentor not found")
    return await mentorship_service.link_artist_sync(db, sync, mentor)
