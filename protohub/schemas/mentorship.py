from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, constr


class JourneyStatus(str, Enum):
    locked = "locked"
    in_progress = "in-progress"
    completed = "completed"


class SyncSource(str, Enum):
    spotify = "spotify"
    genius = "genius"


class SyncInterval(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class MentorOut(BaseModel):
    id: int
    name: str
    inspired_by: str
    profile_image: str
    genre: str
    genres: List[str]
    region: Optional[str] = None
    country: Optional[str] = None
    bio: str
    description: str
    artist_type: Optional[str] = None
    mentor_available: bool
    clone_status: str
    personality_profile: Optional[Dict[str, int]] = None
    specialties: List[str]
    years_active: Optional[str] = None
    media_url: Optional[str] = None
    sample_prompt: Optional[str] = None
    last_updated: datetime

    class Config:
        from_attributes = True


class AssignMentorRequest(BaseModel):
    mentor_id: int


class UserMentorOut(BaseModel):
    mentor: MentorOut
    progress: int
    current_message: Optional[str] = None
    assigned_at: datetime


class JourneyStepOut(BaseModel):
    id: int
    title: str
    description: str
    status: str
    order: int
    icon: str

    class Config:
        from_attributes = True


class UserJourneyStepOut(JourneyStepOut):
    progress: int = 0


class JourneyProgressUpdate(BaseModel):
    status: JourneyStatus
    progress: int = Field(0, ge=0, le=100)


class InspirationItemOut(BaseModel):
    id: int
    mentor_id: Optional[int] = None
    type: str
    title: str
    content: str
    image_url: Optional[str] = None
    audio_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CollaborationOut(BaseModel):
    id: int
    title: str
    description: str
    created_by: str
    looking_for: str
    genre: str
    tags: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ChallengeOut(BaseModel):
    id: int
    title: str
    description: str
    entries: int
    days_left: int
    prize: str
    is_featured: bool
    audio_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AuditionRequest(BaseModel):
    lyrics: constr(strip_whitespace=True, min_length=1, max_length=10000)


class AuditionResult(BaseModel):
    mentors_turned: List[int]
    feedback_text: str
    overall_rating: int
    strengths: List[str]
    improvements: List[str]


class ArtistSyncCreate(BaseModel):
    source: SyncSource
    source_id: constr(strip_whitespace=True, min_length=1, max_length=255)
    sync_interval: SyncInterval = SyncInterval.daily
    priority: int = Field(5, ge=1, le=10)


class ArtistSyncOut(BaseModel):
    id: int
    source: str
    source_id: str
    mentor_id: Optional[int] = None
    last_synced: datetime
    sync_status: str
    raw_data: Optional[Dict[str, Any]] = None
    sync_error: Optional[str] = None
    sync_interval: str
    priority: int
    created_at: datetime

    class Config:
        from_attributes = True
