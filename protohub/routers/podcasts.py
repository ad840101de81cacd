from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.database import get_session
from protohub.dependencies.auth import get_current_user, get_optional_user, require_feature
from protohub.dependencies.rate_limit import rate_limit
from protohub.models.podcasts import Episode, Podcast
from protohub.schemas.podcasts import (
    EpisodeCreate,
    EpisodeOut,
    EpisodeUpdate,
    FollowOut,
    FollowRequest,
    FollowStatus,
    PlayHistoryOut,
    PlayRequest,
    PodcastAnalytics,
    PodcastCreate,
    PodcastDetail,
    PodcastOut,
    PodcastSummary,
    PodcastUpdate,
)
from protohub.services import podcasts as podcast_service
from protohub.services.podcasts import PodcastError

logger = get_logger()
router = APIRouter(prefix="/api", tags=["podcasts"])


def _owns(user: Optional[dict], podcast: Podcast) -> bool:
    return user is not None and podcast.creator_id == user["id"]


async def _podcast_or_404(db: AsyncSession, podcast_id: int) -> Podcast:
    podcast = await podcast_service.get_podcast(db, podcast_id)
    if podcast is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Podcast not found")
    return podcast


async def _owned_podcast(db: AsyncSession, podcast_id: int, user: dict) -> Podcast:
    podcast = await _podcast_or_404(db, podcast_id)
    if not _owns(user, podcast):
        logger.warning("Podcast access denied", podcast_id=podcast_id, user_id=user["id"])
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return podcast


async def _visible_episode(db: AsyncSession, episode_id: int, user: Optional[dict]) -> Episode:
    episode = await podcast_service.get_episode(db, episode_id)
    if episode is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Episode not found")
    if not episode.is_published and not _owns(user, await podcast_service.get_podcast(db, episode.podcast_id)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Episode not found")
    return episode


@router.get("/podcasts/featured", response_model=List[PodcastSummary], dependencies=[rate_limit(30, 60)])
async def featured_podcasts(limit: int = Query(6, ge=1, le=50), db: AsyncSession = Depends(get_session)):
    try:
        return await podcast_service.featured_podcasts(db, limit=limit)
    except Exception as e:
        logger.error("Failed to fetch featured podcasts", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch featured podcasts")


@router.get("/podcasts/search", response_model=List[PodcastSummary], dependencies=[rate_limit(30, 60)])
async def search_podcasts(q: Optional[str] = None, db: AsyncSession = Depends(get_session)):
    if not q or not q.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Search query is required")
    return await podcast_service.search_podcasts(db, q)


@router.get("/podcasts/category/{category}", response_model=List[PodcastSummary])
async def podcasts_by_category(category: str, db: AsyncSession = Depends(get_session)):
    return await podcast_service.podcasts_by_category(db, category)


@router.get("/podcasts/creator/{creator_id}", response_model=List[PodcastSummary])
async def podcasts_by_creator(creator_id: str, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    if creator_id != user["id"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return await podcast_service.podcasts_by_creator(db, creator_id)


@router.get("/podcasts/{podcast_id}", response_model=PodcastDetail)
async def get_podcast(
    podcast_id: int,
    user: Optional[dict] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_session),
):
    podcast = await _podcast_or_404(db, podcast_id)
    owner = _owns(user, podcast)
    if not podcast.is_published and not owner:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Podcast not found")
    return await podcast_service.podcast_detail(db, podcast, include_drafts=owner)


@router.post("/podcasts", response_model=PodcastOut, status_code=status.HTTP_201_CREATED, dependencies=[rate_limit(10, 60)])
async def create_podcast(request: PodcastCreate, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    try:
        return await podcast_service.create_podcast(db, user["id"], request)
    except Exception as e:
        logger.error("Create podcast failed", user_id=user["id"], error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create podcast")


@router.put("/podcasts/{podcast_id}", response_model=PodcastOut)
async def update_podcast(
    podcast_id: int,
    request: PodcastUpdate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    podcast = await _owned_podcast(db, podcast_id, user)
    return await podcast_service.update_podcast(db, podcast, request)


@router.get("/podcasts/{podcast_id}/analytics", response_model=PodcastAnalytics)
async def podcast_analytics(
    podcast_id: int,
    user: dict = Depends(require_feature("has_advanced_analytics")),
    db: AsyncSession = Depends(get_session),
):
    await _owned_podcast(db, podcast_id, user)
    return await podcast_service.podcast_analytics(db, podcast_id)


@router.get("/podcasts/{podcast_id}/rss")
async def podcast_rss(podcast_id: int, request: Request, db: AsyncSession = Depends(get_session)):
    podcast = await _podcast_or_404(db, podcast_id)
    if not podcast.is_published:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Podcast not found")
    detail = await podcast_service.podcast_detail(db, podcast)
    feed = podcast_service.build_rss(podcast, detail["episodes"], str(request.base_url))
    return Response(content=feed, media_type="application/rss+xml")


@router.get("/episodes/{episode_id}", response_model=EpisodeOut)
async def get_episode(
    episode_id: int,
    user: Optional[dict] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_session),
):
    return await _visible_episode(db, episode_id, user)


@router.post("/episodes", response_model=EpisodeOut, status_code=status.HTTP_201_CREATED, dependencies=[rate_limit(20, 60)])
async def create_episode(request: EpisodeCreate, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    await _owned_podcast(db, request.podcast_id, user)
    try:
        return await podcast_service.create_episode(db, request)
    except Exception as e:
        logger.error("Create episode failed", user_id=user["id"], podcast_id=request.podcast_id, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create episode")


@router.put("/episodes/{episode_id}", response_model=EpisodeOut)
async def update_episode(
    episode_id: int,
    request: EpisodeUpdate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    episode = await podcast_service.get_episode(db, episode_id)
    if episode is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Episode not found")
    await _owned_podcast(db, episode.podcast_id, user)
    return await podcast_service.update_episode(db, episode, request)


@router.post("/episodes/{episode_id}/play", dependencies=[rate_limit(60, 60)])
async def play_episode(
    episode_id: int,
    user: Optional[dict] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_session),
):
    episode = await _visible_episode(db, episode_id, user)
    await podcast_service.increment_play_count(db, episode)
    return {"message": "Play count incremented"}


@router.post("/follows", response_model=FollowOut, status_code=status.HTTP_201_CREATED)
async def follow_podcast(request: FollowRequest, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    try:
        return await podcast_service.follow_podcast(db, user["id"], request.podcast_id)
    except PodcastError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/follows", response_model=List[PodcastSummary])
async def followed_podcasts(user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    return await podcast_service.followed_podcasts(db, user["id"])


@router.get("/follows/{podcast_id}/status", response_model=FollowStatus)
async def follow_status(podcast_id: int, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    return {"is_following": await podcast_service.is_following(db, user["id"], podcast_id)}


@router.delete("/follows/{podcast_id}")
async def unfollow_podcast(podcast_id: int, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    await podcast_service.unfollow_podcast(db, user["id"], podcast_id)
    return {"message": "Unfollowed successfully"}


@router.post("/play-history")
async def record_play(request: PlayRequest, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    try:
        await podcast_service.record_play(db, user["id"], request.episode_id, request.progress, request.completed)
    except PodcastError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return {"message": "Play recorded"}


@router.get("/play-history", response_model=List[PlayHistoryOut])
async def play_history(
    limit: int = Query(20, ge=1, le=100),
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    return await podcast_service.play_history(db, user["id"], limit=limit)
