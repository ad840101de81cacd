from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PropertyOut(BaseModel):
    id: int
    title: str
    description: str
    location: str
    city: str
    country: str
    price: float
    image_url: str
    host_id: str
    rating: Optional[float] = None
    review_count: int
    property_type: str
    is_featured: bool
    is_unique_stay: bool
    unique_stay_type: Optional[str] = None
    available_start: Optional[datetime] = None
    available_end: Optional[datetime] = None
    bedrooms: int
    bathrooms: int
    max_guests: int

    class Config:
        from_attributes = True


class DestinationOut(BaseModel):
    id: int
    name: str
    country: str
    image_url: str
    description: Optional[str] = None
    featured: bool

    class Config:
        from_attributes = True


class TestimonialOut(BaseModel):
    id: int
    user_id: str
    rating: int
    comment: str
    user_country: Optional[str] = None
    user_name: str
    user_image: Optional[str] = None
    property_id: Optional[int] = None

    class Config:
        from_attributes = True


class StaySearchQuery(BaseModel):
    q: str = Field("", description="Free text matched against title, description, location, city and country")
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    guests: Optional[int] = Field(None, ge=1)


class BookingCreate(BaseModel):
    property_id: int
    check_in: datetime
    check_out: datetime
    guests: int

    class Config:
        json_schema_extra = {
            "example": {
                "property_id": 2,
                "check_in": "2025-12-05T14:00:00Z",
                "check_out": "2025-12-09T10:00:00Z",
                "guests": 4,
            }
        }


class BookingOut(BaseModel):
    id: int
    user_id: str
    property_id: int
    check_in: datetime
    check_out: datetime
    guests: int
    total_price: float
    status: str
    created_at: datetime

    class Config:
        from_attributes = True
