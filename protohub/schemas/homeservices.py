from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class ServiceOut(BaseModel):
    id: int
    name: str
    slug: str
    description: str
    image_url: Optional[str] = None

    class Config:
        from_attributes = True


class ProfessionalOut(BaseModel):
    id: int
    name: str
    profession: str
    bio: str
    image_url: str
    rating: float
    review_count: int
    verifications: List[str]

    class Config:
        from_attributes = True


class ServiceTestimonialOut(BaseModel):
    id: int
    name: str
    location: str
    rating: int
    comment: str
    service: str
    image_url: str

    class Config:
        from_attributes = True


class ContactRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)


class ContactResponse(BaseModel):
    id: int
    message: str
