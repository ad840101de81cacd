from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SafetyLevel(str, Enum):
    safe = "safe"
    warning = "warning"
    danger = "danger"


class Sex(str, Enum):
    male = "male"
    female = "female"


class BreathSampleRequest(BaseModel):
    audio_sample: str = Field(..., min_length=1, description="Base64 encoded recording of the breath sample")
    location: Optional[str] = None


class BreathResult(BaseModel):
    bac: str
    level: SafetyLevel
    message: str


class BreathTestOut(BaseModel):
    id: int
    user_id: str
    bac: float
    level: str
    message: str
    location: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class MetabolismRequest(BaseModel):
    bac: float = Field(..., ge=0, le=1.0)
    weight_kg: float = Field(70, gt=0, le=500)
    sex: Sex = Sex.male


class MetabolismPoint(BaseModel):
    time: float
    bac: float


class MetabolismResponse(BaseModel):
    rate: float
    hours_to_sober: float
    curve: List[MetabolismPoint]
