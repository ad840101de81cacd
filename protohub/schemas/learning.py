from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SubjectOut(BaseModel):
    id: int
    name: str
    code: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    color: Optional[str] = None

    class Config:
        from_attributes = True


class CourseOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    subject_id: int
    level: str
    image_url: Optional[str] = None
    certification_type: Optional[str] = None

    class Config:
        from_attributes = True


class LessonOut(BaseModel):
    id: int
    course_id: int
    title: str
    description: Optional[str] = None
    video_url: Optional[str] = None
    order: int
    duration: Optional[int] = None

    class Config:
        from_attributes = True


class CourseDetail(CourseOut):
    lessons: List[LessonOut] = []


class CourseProgress(CourseOut):
    percent_complete: int = 0
    last_lesson_id: Optional[int] = None
    last_accessed: Optional[datetime] = None


class ProgressUpdate(BaseModel):
    course_id: int
    last_lesson_id: Optional[int] = None
    percent_complete: int = Field(..., ge=0, le=100)


class ProgressOut(BaseModel):
    id: int
    user_id: str
    course_id: int
    last_lesson_id: Optional[int] = None
    percent_complete: int
    last_accessed: datetime

    class Config:
        from_attributes = True


class InstructorOut(BaseModel):
    id: int
    name: str
    appearance: str
    voice: str
    subject_specialties: List[int]
    language: str
    rating: int
    rating_count: int

    class Config:
        from_attributes = True


class UserInstructorOut(InstructorOut):
    is_customized: bool = False
    custom_settings: Optional[Dict[str, Any]] = None


class SaveInstructorRequest(BaseModel):
    instructor_id: int
    is_customized: bool = False
    custom_settings: Optional[Dict[str, Any]] = None


class ActivityOut(BaseModel):
    id: int
    user_id: str
    activity_type: str
    resource_id: Optional[int] = None
    resource_type: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime

    class Config:
        from_attributes = True
