from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, constr


class ReservationStatus(str, Enum):
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class RestaurantOut(BaseModel):
    id: int
    name: str
    description: str
    cuisine_type: str
    country: str
    address: str
    city: str
    phone_number: Optional[str] = None
    website: Optional[str] = None
    opening_hours: str
    price_range: str
    image_url: str
    rating: float
    review_count: int

    class Config:
        from_attributes = True


class MenuItemOut(BaseModel):
    id: int
    restaurant_id: int
    name: str
    description: str
    price: float
    image_url: Optional[str] = None
    featured: bool

    class Config:
        from_attributes = True


class ReviewCreate(BaseModel):
    restaurant_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[constr(strip_whitespace=True, max_length=2000)] = None


class ReviewOut(BaseModel):
    id: int
    restaurant_id: int
    user_id: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ReservationCreate(BaseModel):
    restaurant_id: int
    date: datetime
    party_size: int = Field(..., ge=1, le=50)
    special_requests: Optional[str] = Field(None, max_length=1000)


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus


class ReservationOut(BaseModel):
    id: int
    restaurant_id: int
    user_id: str
    date: datetime
    party_size: int
    status: str
    special_requests: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CulturalInsightOut(BaseModel):
    id: int
    title: str
    content: str
    cuisine_type: str
    region: str
    image_url: str

    class Config:
        from_attributes = True


class FoodOriginStoryCreate(BaseModel):
    dish_name: constr(strip_whitespace=True, min_length=1, max_length=255)
    cuisine_type: constr(strip_whitespace=True, min_length=1, max_length=100)
    country: constr(strip_whitespace=True, min_length=1, max_length=120)
    story_content: constr(strip_whitespace=True, min_length=1)
    historical_period: Optional[str] = None
    cultural_significance: Optional[str] = None
    ingredients: Optional[str] = None
    image_url: Optional[str] = None


class FoodOriginStoryOut(FoodOriginStoryCreate):
    id: int

    class Config:
        from_attributes = True
