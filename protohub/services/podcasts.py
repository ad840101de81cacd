import xml.etree.ElementTree as ET
from email.utils import format_datetime
from typing import List, Optional

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.models.podcasts import Episode, Follow, PlayHistory, Podcast
from protohub.schemas.podcasts import EpisodeCreate, EpisodeUpdate, PodcastCreate, PodcastOut, PodcastUpdate
from protohub.utils.dates import as_utc, utcnow
from protohub.utils.search import LIKE_ESCAPE, contains_pattern

logger = get_logger()

ITUNES_NS = "http://www.itunes.com/dtds/podcast-1.0.dtd"
ET.register_namespace("itunes", ITUNES_NS)


class PodcastError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _episode_count():
    return (
        select(func.count(Episode.id))
        .where(Episode.podcast_id == Podcast.id, Episode.is_published.is_(True))
        .correlate(Podcast)
        .scalar_subquery()
    )


def _follow_count():
    return select(func.count(Follow.id)).where(Follow.podcast_id == Podcast.id).correlate(Podcast).scalar_subquery()


async def _summaries(db: AsyncSession, *criteria, order_by=None, limit: Optional[int] = None) -> List[dict]:
    follows = _follow_count()
    query = select(Podcast, _episode_count().label("episode_count"), follows.label("follow_count")).where(*criteria)
    query = query.order_by(*(order_by if order_by is not None else (follows.desc(), Podcast.id)))
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return [
        {**PodcastOut.model_validate(podcast).model_dump(), "episode_count": episodes, "follow_count": followers}
        for podcast, episodes, followers in result.all()
    ]


async def featured_podcasts(db: AsyncSession, limit: int = 6) -> List[dict]:
    return await _summaries(db, Podcast.is_published.is_(True), limit=limit)


async def search_podcasts(db: AsyncSession, q: str) -> List[dict]:
    pattern = contains_pattern(q.strip().lower())
    return await _summaries(
        db,
        Podcast.is_published.is_(True),
        or_(
            func.lower(Podcast.title).like(pattern, escape=LIKE_ESCAPE),
            func.lower(Podcast.description).like(pattern, escape=LIKE_ESCAPE),
        ),
    )


async def podcasts_by_category(db: AsyncSession, category: str) -> List[dict]:
    return await _summaries(db, Podcast.is_published.is_(True), func.lower(Podcast.category) == category.strip().lower())


async def podcasts_by_creator(db: AsyncSession, creator_id: str) -> List[dict]:
    return await _summaries(db, Podcast.creator_id == creator_id, order_by=(Podcast.created_at.desc(), Podcast.id.desc()))


async def followed_podcasts(db: AsyncSession, user_id: str) -> List[dict]:
    followed = select(Follow.podcast_id).where(Follow.follower_id == user_id)
    return await _summaries(db, Podcast.id.in_(followed), order_by=(Podcast.title,))


async def get_podcast(db: AsyncSession, podcast_id: int) -> Optional[Podcast]:
    return await db.get(Podcast, podcast_id)


async def podcast_detail(db: AsyncSession, podcast: Podcast, include_drafts: bool = False) -> dict:
    summary = (await _summaries(db, Podcast.id == podcast.id))[0]
    query = select(Episode).where(Episode.podcast_id == podcast.id)
    if not include_drafts:
        query = query.where(Episode.is_published.is_(True))
    result = await db.execute(query.order_by(Episode.episode_number.desc(), Episode.id.desc()))
    summary["episodes"] = list(result.scalars().all())
    return summary


async def create_podcast(db: AsyncSession, creator_id: str, request: PodcastCreate) -> Podcast:
    podcast = Podcast(creator_id=creator_id, **request.model_dump())
    db.add(podcast)
    await db.commit()
    await db.refresh(podcast)
    logger.info("Podcast created", podcast_id=podcast.id, creator_id=creator_id)
    return podcast


async def update_podcast(db: AsyncSession, podcast: Podcast, request: PodcastUpdate) -> Podcast:
    for field, value in request.model_dump(exclude_unset=True).items():
        setattr(podcast, field, value)
    podcast.updated_at = utcnow()
    await db.commit()
    await db.refresh(podcast)
    return podcast


async def get_episode(db: AsyncSession, episode_id: int) -> Optional[Episode]:
    return await db.get(Episode, episode_id)


async def create_episode(db: AsyncSession, request: EpisodeCreate) -> Episode:
    episode = Episode(**request.model_dump())
    if episode.is_published:
        episode.published_at = utcnow()
    db.add(episode)
    await db.commit()
    await db.refresh(episode)
    logger.info("Episode created", episode_id=episode.id, podcast_id=episode.podcast_id)
    return episode


async def update_episode(db: AsyncSession, episode: Episode, request: EpisodeUpdate) -> Episode:
    changes = request.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(episode, field, value)
    if changes.get("is_published") and episode.published_at is None:
        episode.published_at = utcnow()
    episode.updated_at = utcnow()
    await db.commit()
    await db.refresh(episode)
    return episode


async def increment_play_count(db: AsyncSession, episode: Episode) -> None:
    episode.play_count = Episode.play_count + 1
    await db.commit()
    await db.refresh(episode)


async def is_following(db: AsyncSession, user_id: str, podcast_id: int) -> bool:
    result = await db.execute(select(Follow.id).where(Follow.follower_id == user_id, Follow.podcast_id == podcast_id))
    return result.first() is not None


async def follow_podcast(db: AsyncSession, user_id: str, podcast_id: int) -> Follow:
    if await db.get(Podcast, podcast_id) is None:
        raise PodcastError("Podcast not found", status_code=404)
    if await is_following(db, user_id, podcast_id):
        raise PodcastError("Already following this podcast", status_code=409)
    follow = Follow(follower_id=user_id, podcast_id=podcast_id)
    db.add(follow)
    await db.commit()
    await db.refresh(follow)
    return follow


async def unfollow_podcast(db: AsyncSession, user_id: str, podcast_id: int) -> None:
    await db.execute(delete(Follow).where(Follow.follower_id == user_id, Follow.podcast_id == podcast_id))
    await db.commit()


async def record_play(db: AsyncSession, user_id: str, episode_id: int, progress: int, completed: bool) -> PlayHistory:
    """Insert or update the user's single history row for ``episode_id``."""
    if await db.get(Episode, episode_id) is None:
        raise PodcastError("Episode not found", status_code=404)
    result = await db.execute(
        select(PlayHistory).where(PlayHistory.user_id == user_id, PlayHistory.episode_id == episode_id)
    )
    play = result.scalars().first()
    if play is None:
        play = PlayHistory(user_id=user_id, episode_id=episode_id)
        db.add(play)
    play.progress = progress
    play.completed = completed
    play.played_at = utcnow()
    await db.commit()
    return play


async def play_history(db: AsyncSession, user_id: str, limit: int = 20) -> List[dict]:
    result = await db.execute(
        select(PlayHistory, Episode, Podcast.title)
        .join(Episode, Episode.id == PlayHistory.episode_id)
        .join(Podcast, Podcast.id == Episode.podcast_id)
        .where(PlayHistory.user_id == user_id)
        .order_by(PlayHistory.played_at.desc(), PlayHistory.id.desc())
        .limit(limit)
    )
    return [
        {
            "episode": episode,
            "podcast_title": title,
            "progress": play.progress,
            "completed": play.completed,
            "played_at": play.played_at,
        }
        for play, episode, title in result.all()
    ]


async def podcast_analytics(db: AsyncSession, podcast_id: int) -> dict:
    plays, episodes = (await db.execute(
        select(func.coalesce(func.sum(Episode.play_count), 0), func.count(Episode.id)).where(Episode.podcast_id == podcast_id)
    )).one()
    follows = (await db.execute(select(func.count(Follow.id)).where(Follow.podcast_id == podcast_id))).scalar_one()
    completed = (await db.execute(
        select(func.count(PlayHistory.id))
        .join(Episode, Episode.id == PlayHistory.episode_id)
        .where(and_(Episode.podcast_id == podcast_id, PlayHistory.completed.is_(True)))
    )).scalar_one()
    return {"total_plays": plays, "total_follows": follows, "episode_count": episodes, "completed_listens": completed}


def _absolute(base_url: str, url: Optional[str]) -> str:
    if not url or url.startswith(("http://", "https://")):
        return url or ""
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


def build_rss(podcast: Podcast, episodes: List[Episode], base_url: str) -> bytes:
    """RSS 2.0 feed with iTunes tags for the published ``episodes`` of ``podcast``."""
    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = podcast.title
    ET.SubElement(channel, "description").text = podcast.description or ""
    ET.SubElement(channel, "link").text = _absolute(base_url, f"/podcast/{podcast.id}")
    ET.SubElement(channel, "language").text = "en-us"
    ET.SubElement(channel, f"{{{ITUNES_NS}}}author").text = podcast.creator_id
    if podcast.cover_image_url:
        ET.SubElement(channel, f"{{{ITUNES_NS}}}image", {"href": _absolute(base_url, podcast.cover_image_url)})
    ET.SubElement(channel, f"{{{ITUNES_NS}}}category", {"text": podcast.category or "General"})

    for episode in episodes:
        item = ET.SubElement(channel, "item")
        ET.SubElement(item, "title").text = episode.title
        ET.SubElement(item, "description").text = episode.description or ""
        ET.SubElement(item, "enclosure", {"url": _absolute(base_url, episode.audio_url), "type": "audio/mpeg"})
        ET.SubElement(item, "guid", {"isPermaLink": "false"}).text = f"episode-{episode.id}"
        published = episode.published_at or episode.created_at
        ET.SubElement(item, "pubDate").text = format_datetime(as_utc(published), usegmt=True)
        ET.SubElement(item, f"{{{ITUNES_NS}}}duration").text = str(episode.duration or 0)
    return ET.tostring(rss, encoding="utf-8", xml_declaration=True)
