import random
import re
from typing import List, Optional, Tuple

from redis.asyncio import Redis
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.cache import cached_json
from protohub.models.mentorship import (
    ArtistSync,
    Challenge,
    Collaboration,
    InspirationItem,
    JourneyStep,
    Mentor,
    UserJourneyStep,
    UserMentor,
)
from protohub.schemas.mentorship import (
    ArtistSyncCreate,
    JourneyProgressUpdate,
    MentorOut,
)
from protohub.utils.dates import utcnow

logger = get_logger()

WELCOME_MESSAGE = (
    "Your flow is getting tighter. Let's work on making those metaphors more layered. "
    "Great writers create worlds within worlds. For your next verse, try connecting your "
    "personal story to something bigger."
)

_WORD = re.compile(r"[a-z']+")


class MentorshipError(Exception):
    """Mentorship request rejected by a business rule."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


async def list_mentors(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(Mentor).order_by(Mentor.id))
        return [MentorOut.model_validate(row).model_dump(mode="json") for row in result.scalars().all()]
    return await cached_json(cache, "mentorship:mentors", load)


async def get_mentor(db: AsyncSession, mentor_id: int) -> Optional[Mentor]:
    return await db.get(Mentor, mentor_id)


async def get_user_mentor(db: AsyncSession, user_id: str) -> Optional[Tuple[UserMentor, Mentor]]:
    result = await db.execute(
        select(UserMentor, Mentor).join(Mentor, Mentor.id == UserMentor.mentor_id).where(UserMentor.user_id == user_id)
    )
    row = result.first()
    return (row[0], row[1]) if row else None


async def assign_mentor(db: AsyncSession, user_id: str, mentor_id: int) -> Tuple[UserMentor, Mentor]:
    mentor = await db.get(Mentor, mentor_id)
    if mentor is None:
        raise MentorshipError("Mentor not found", status_code=404)
    if await get_user_mentor(db, user_id) is not None:
        raise MentorshipError("User already has a mentor assigned")

    assignment = UserMentor(user_id=user_id, mentor_id=mentor.id, progress=0, current_message=WELCOME_MESSAGE)
    db.add(assignment)
    await db.commit()
    await db.refresh(assignment)
    logger.info("Mentor assigned", user_id=user_id, mentor_id=mentor.id)
    return assignment, mentor


async def list_journey_steps(db: AsyncSession) -> List[JourneyStep]:
    result = await db.execute(select(JourneyStep).order_by(JourneyStep.order))
    return list(result.scalars().all())


async def list_user_journey(db: AsyncSession, user_id: str) -> List[dict]:
    """Every journey step in order, with the user's own status where one is recorded."""
    steps = await list_journey_steps(db)
    result = await db.execute(select(UserJourneyStep).where(UserJourneyStep.user_id == user_id))
    recorded = {row.step_id: row for row in result.scalars().all()}

    journey = []
    for step in steps:
        mine = recorded.get(step.id)
        journey.append({
            "id": step.id,
            "title": step.title,
            "description": step.description,
            "order": step.order,
            "icon": step.icon,
            "status": mine.status if mine else step.status,
            "progress": mine.progress if mine else 0,
        })
    return journey


async def update_user_journey_step(
    db: AsyncSession, user_id: str, step_id: int, request: JourneyProgressUpdate
) -> UserJourneyStep:
    if await db.get(JourneyStep, step_id) is None:
        raise MentorshipError("Journey step not found", status_code=404)

    result = await db.execute(
        select(UserJourneyStep).where(UserJourneyStep.user_id == user_id, UserJourneyStep.step_id == step_id)
    )
    row = result.scalars().first()
    progress = 100 if request.status.value == "completed" else request.progress
    if row is None:
        row = UserJourneyStep(user_id=user_id, step_id=step_id)
        db.add(row)
    row.status = request.status.value
    row.progress = progress
    row.updated_at = utcnow()
    await db.commit()
    await db.refresh(row)
    return row


async def list_inspiration(db: AsyncSession) -> List[InspirationItem]:
    result = await db.execute(select(InspirationItem).order_by(InspirationItem.created_at.desc(), InspirationItem.id))
    return list(result.scalars().all())


async def list_collaborations(db: AsyncSession) -> List[Collaboration]:
    result = await db.execute(select(Collaboration).order_by(Collaboration.id))
    return list(result.scalars().all())


async def list_challenges(db: AsyncSession) -> List[Challenge]:
    result = await db.execute(select(Challenge).order_by(Challenge.is_featured.desc(), Challenge.id))
    return list(result.scalars().all())


def analyze_lyrics(lyrics: str) -> dict:
    """
    Score lyrics from 1 to 10 on length, vocabulary and rhyme.

    Up to three points each for verse length (one per four lines), vocabulary
    variety (unique/total words) and rhyme density (adjacent lines whose last
    words share their final two letters), plus one base point.
    """
    lines = [line for line in (raw.strip().lower() for raw in lyrics.splitlines()) if _WORD.search(line)]
    words = _WORD.findall(lyrics.lower())
    variety = len(set(words)) / len(words) if words else 0.0

    endings = [_WORD.findall(line)[-1][-2:] for line in lines]
    pairs = max(1, len(endings) - 1)
    rhymes = sum(1 for a, b in zip(endings, endings[1:]) if a == b) / pairs

    rating = 1 + min(3, len(lines) // 4) + round(3 * variety) + round(3 * rhymes)
    rating = max(1, min(10, rating))

    strengths, improvements = [], []
    if len(lines) >= 8:
        strengths.append("developed verse structure")
    else:
        improvements.append("write longer verses to develop your ideas")
    if variety >= 0.6:
        strengths.append("varied vocabulary")
    else:
        improvements.append("vary your word choice")
    if rhymes >= 0.5:
        strengths.append("consistent rhyme scheme")
    else:
        improvements.append("tighten your rhyme scheme")

    return {
        "overall_rating": rating,
        "analysis": f"Your lyrics scored {rating}/10 across {len(lines)} lines.",
        "strengths": strengths,
        "improvements": improvements,
    }


def turn_chance(rating: int) -> float:
    if rating <= 3:
        return 0.0
    if rating <= 6:
        return 0.25
    if rating <= 8:
        return 0.5
    return 0.75


async def blind_audition(db: AsyncSession, lyrics: str, rng: Optional[random.Random] = None) -> dict:
    rng = rng or random.Random()
    analysis = analyze_lyrics(lyrics)
    chance = turn_chance(analysis["overall_rating"])

    mentor_ids = (await db.execute(select(Mentor.id).order_by(Mentor.id))).scalars().all()
    turned = [mentor_id for mentor_id in mentor_ids if rng.random() < chance]

    strengths = ", ".join(analysis["strengths"]) or "raw potential"
    improvements = ", ".join(analysis["improvements"]) or "keep refining your delivery"
    if not turned:
        feedback = (
            "Thank you for your audition! While none of our mentors turned this time, we see potential in your work. "
            f"{analysis['analysis']} Focus on these areas: {improvements}. Keep developing your unique voice and style!"
        )
    else:
        feedback = (
            f"Congratulations! You've impressed {len(turned)} of our mentors. {analysis['analysis']} "
            f"Your strengths include: {strengths}. To continue improving, consider: {improvements}. "
            "Choose a mentor to start your journey!"
        )
    logger.info("Blind audition scored", rating=analysis["overall_rating"], mentors_turned=len(turned))
    return {
        "mentors_turned": turned,
        "feedback_text": feedback,
        "overall_rating": analysis["overall_rating"],
        "strengths": analysis["strengths"],
        "improvements": analysis["improvements"],
    }


async def list_artist_syncs(db: AsyncSession, sync_status: Optional[str] = None, limit: Optional[int] = None) -> List[ArtistSync]:
    query = select(ArtistSync).order_by(ArtistSync.priority, ArtistSync.id)
    if sync_status:
        query = query.where(ArtistSync.sync_status == sync_status)
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_artist_sync(db: AsyncSession, sync_id: int) -> Optional[ArtistSync]:
    return await db.get(ArtistSync, sync_id)


async def find_artist_sync(db: AsyncSession, source: str, source_id: str) -> Optional[ArtistSync]:
    result = await db.execute(select(ArtistSync).where(ArtistSync.source == source, ArtistSync.source_id == source_id))
    return result.scalars().first()


async def create_artist_sync(db: AsyncSession, request: ArtistSyncCreate) -> ArtistSync:
    sync = ArtistSync(
        source=request.source.value,
        source_id=request.source_id,
        sync_interval=request.sync_interval.value,
        priority=request.priority,
        sync_status="pending",
        last_synced=utcnow(),
    )
    db.add(sync)
    await db.commit()
    await db.refresh(sync)
    logger.info("Artist sync queued", sync_id=sync.id, source=sync.source, source_id=sync.source_id)
    return sync


async def refresh_artist_sync(db: AsyncSession, sync: ArtistSync) -> ArtistSync:
    sync.sync_status = "pending"
    sync.sync_error = None
    sync.last_synced = utcnow()
    await db.commit()
    await db.refresh(sync)
    return sync


async def link_artist_sync(db: AsyncSession, sync: ArtistSync, mentor: Mentor) -> ArtistSync:
    sync.mentor_id = mentor.id
    await db.commit()
    await db.refresh(sync)
    logger.info("Artist sync linked", sync_id=sync.id, mentor_id=mentor.id)
    return sync
