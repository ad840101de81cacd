from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, computed_field, constr


class TrendCategory(str, Enum):
    viral = "viral"
    news = "news"
    sports = "sports"
    finance = "finance"
    culture = "culture"


class Region(str, Enum):
    global_ = "global"
    us = "us"
    uk = "uk"
    jp = "jp"
    de = "de"
    fr = "fr"
    es = "es"


class Prediction(str, Enum):
    will_grow = "will_grow"
    will_stabilize = "will_stabilize"
    will_fade = "will_fade"


def growth_label(growth: int) -> str:
    return f"{'+' if growth >= 0 else ''}{growth}%"


class TrendOut(BaseModel):
    id: int
    title: str
    category: str
    searches: int
    growth: int
    countries: int
    ai_summary: str
    prediction: Optional[str] = None
    region: str
    is_active: bool
    created_at: datetime

    @computed_field
    @property
    def growth_label(self) -> str:
        return growth_label(self.growth)

    class Config:
        from_attributes = True


class TrendSubmissionRequest(BaseModel):
    topic: constr(strip_whitespace=True, min_length=1, max_length=255)
    category: TrendCategory
    region: Region = Region.global_
    description: Optional[str] = None


class TrendSubmissionResponse(BaseModel):
    message: str
    submission_id: int


class CountryTrend(BaseModel):
    name: str
    flag: str
    top_trend: str
    searches: str
    growth: str
    code: str


class PredictionInsight(BaseModel):
    title: str
    status: Prediction


class OpportunityInsight(BaseModel):
    title: str
    description: str


class InsightsOut(BaseModel):
    predictions: List[PredictionInsight]
    opportunities: List[OpportunityInsight]


class AnalysisOut(BaseModel):
    analysis: str
