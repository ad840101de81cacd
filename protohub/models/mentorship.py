from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from protohub.models import Base


class Mentor(Base):
    __tablename__ = "mentors"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    inspired_by = Column(String(100), nullable=False)
    profile_image = Column(Text, nullable=False)
    genre = Column(String(100), nullable=False)
    genres = Column(JSON, nullable=False, default=list)
    region = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    bio = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    artist_type = Column(String(50), nullable=True)
    mentor_available = Column(Boolean, nullable=False, default=True)
    clone_status = Column(String(20), nullable=False, default="AI")
    personality_profile = Column(JSON, nullable=True)
    specialties = Column(JSON, nullable=False, default=list)
    years_active = Column(String(50), nullable=True)
    spotify_id = Column(String(255), nullable=True)
    genius_id = Column(String(255), nullable=True)
    media_url = Column(Text, nullable=True)
    sample_prompt = Column(Text, nullable=True)
    last_updated = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    auto_updated = Column(Boolean, nullable=False, default=False)


class UserMentor(Base):
    __tablename__ = "user_mentors"
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, unique=True)
    mentor_id = Column(Integer, ForeignKey("mentors.id", ondelete="CASCADE"), nullable=False)
    progress = Column(Integer, nullable=False, default=0)
    current_message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class JourneyStep(Base):
    __tablename__ = "journey_steps"
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="locked")
    order = Column(Integer, nullable=False)
    icon = Column(String(50), nullable=False)


class UserJourneyStep(Base):
    __tablename__ = "user_journey_steps"
    __table_args__ = (UniqueConstraint("user_id", "step_id", name="uq_user_journey_step"),)
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    step_id = Column(Integer, ForeignKey("journey_steps.id", ondelete="CASCADE"), nullable=False)
    status = Column(String(20), nullable=False)
    progress = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class InspirationItem(Base):
    __tablename__ = "inspiration_items"
    id = Column(Integer, primary_key=True)
    mentor_id = Column(Integer, ForeignKey("mentors.id", ondelete="SET NULL"), nullable=True)
    type = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)
    audio_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Collaboration(Base):
    __tablename__ = "collaborations"
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    created_by = Column(String(64), nullable=False)
    looking_for = Column(String(255), nullable=False)
    genre = Column(String(100), nullable=False)
    tags = Column(String(255), nullable=True)
    image_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Challenge(Base):
    __tablename__ = "challenges"
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    entries = Column(Integer, nullable=False, default=0)
    days_left = Column(Integer, nullable=False)
    prize = Column(String(255), nullable=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    audio_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class ArtistSync(Base):
    __tablename__ = "artist_syncs"
    __table_args__ = (UniqueConstraint("source", "source_id", name="uq_artist_sync_source"),)
    id = Column(Integer, primary_key=True)
    source = Column(String(20), nullable=False)
    source_id = Column(String(255), nullable=False)
    mentor_id = Column(Integer, ForeignKey("mentors.id", ondelete="SET NULL"), nullable=True)
    last_synced = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    sync_status = Column(String(20), nullable=False, default="pending")
    raw_data = Column(JSON, nullable=True)
    sync_error = Column(Text, nullable=True)
    sync_interval = Column(String(20), nullable=False, default="daily")
    priority = Column(Integer, nullable=False, default=5)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
