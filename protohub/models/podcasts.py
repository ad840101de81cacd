from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func

from protohub.models import Base


class Podcast(Base):
    __tablename__ = "podcasts"
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    cover_image_url = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    creator_id = Column(String(64), nullable=False, index=True)
    is_published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class Episode(Base):
    __tablename__ = "episodes"
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    audio_url = Column(Text, nullable=False)
    duration = Column(Integer, nullable=True)
    episode_number = Column(Integer, nullable=True)
    cover_image_url = Column(Text, nullable=True)
    podcast_id = Column(Integer, ForeignKey("podcasts.id", ondelete="CASCADE"), nullable=False, index=True)
    play_count = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class Follow(Base):
    __tablename__ = "follows"
    __table_args__ = (UniqueConstraint("follower_id", "podcast_id", name="uq_follow"),)
    id = Column(Integer, primary_key=True)
    follower_id = Column(String(64), nullable=False, index=True)
    podcast_id = Column(Integer, ForeignKey("podcasts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class PlayHistory(Base):
    __tablename__ = "play_history"
    __table_args__ = (UniqueConstraint("user_id", "episode_id", name="uq_play_history"),)
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    episode_id = Column(Integer, ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False)
    progress = Column(Integer, nullable=False, default=0)
    completed = Column(Boolean, nullable=False, default=False)
    played_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
