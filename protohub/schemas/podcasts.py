from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from protohub.schemas.validators import reject_null


class PodcastCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    is_published: bool = False


class PodcastUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    is_published: Optional[bool] = None

    @field_validator("title", "is_published")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class PodcastOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    category: Optional[str] = None
    creator_id: str
    is_published: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PodcastSummary(PodcastOut):
    episode_count: int = 0
    follow_count: int = 0


class EpisodeCreate(BaseModel):
    podcast_id: int
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    audio_url: str = Field(..., min_length=1)
    duration: Optional[int] = Field(None, ge=0, description="Length in seconds")
    episode_number: Optional[int] = Field(None, ge=1)
    cover_image_url: Optional[str] = None
    is_published: bool = False


class EpisodeUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    audio_url: Optional[str] = Field(None, min_length=1)
    duration: Optional[int] = Field(None, ge=0)
    episode_number: Optional[int] = Field(None, ge=1)
    cover_image_url: Optional[str] = None
    is_published: Optional[bool] = None

    @field_validator("title", "audio_url", "is_published")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class EpisodeOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    audio_url: str
    duration: Optional[int] = None
    episode_number: Optional[int] = None
    cover_image_url: Optional[str] = None
    podcast_id: int
    play_count: int
    is_published: bool
    published_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class PodcastDetail(PodcastSummary):
    episodes: List[EpisodeOut] = []


class FollowRequest(BaseModel):
    podcast_id: int


class FollowOut(BaseModel):
    id: int
    follower_id: str
    podcast_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class FollowStatus(BaseModel):
    is_following: bool


class PlayRequest(BaseModel):
    episode_id: int
    progress: int = Field(0, ge=0, description="Seconds listened")
    completed: bool = False


class PlayHistoryOut(BaseModel):
    episode: EpisodeOut
    podcast_title: str
    progress: int
    completed: bool
    played_at: datetime


class PodcastAnalytics(BaseModel):
    total_plays: int
    total_follows: int
    episode_count: int
    completed_listens: int
