from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.cache import get_cache
from protohub.core.database import get_session
from protohub.dependencies.auth import get_current_user
from protohub.dependencies.rate_limit import rate_limit
from protohub.schemas.learning import (
    ActivityOut,
    CourseDetail,
    CourseOut,
    CourseProgress,
    InstructorOut,
    LessonOut,
    ProgressOut,
    ProgressUpdate,
    SaveInstructorRequest,
    SubjectOut,
    UserInstructorOut,
)
from protohub.services import learning as learning_service
from protohub.services.learning import LearningError

logger = get_logger()
router = APIRouter(prefix="/api", tags=["learning"])


@router.get("/subjects", response_model=List[SubjectOut], dependencies=[rate_limit(30, 60)])
async def list_subjects(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    try:
        return await learning_service.list_subjects(db, cache)
    except Exception as e:
        logger.error("Failed to fetch subjects", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch subjects")


@router.get("/courses", response_model=List[CourseOut], dependencies=[rate_limit(30, 60)])
async def list_courses(
    subject_id: Optional[int] = None,
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    try:
        return await learning_service.list_courses(db, cache, subject_id=subject_id)
    except Exception as e:
        logger.error("Failed to fetch courses", subject_id=subject_id, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch courses")


@router.get("/courses/{course_id}", response_model=CourseDetail)
async def get_course(course_id: int, db: AsyncSession = Depends(get_session)):
    course = await learning_service.get_course(db, course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return {**CourseOut.model_validate(course).model_dump(), "lessons": await learning_service.list_lessons(db, course_id)}


@router.get("/lessons/{lesson_id}", response_model=LessonOut)
async def get_lesson(lesson_id: int, db: AsyncSession = Depends(get_session)):
    lesson = await learning_service.get_lesson(db, lesson_id)
    if lesson is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")
    return lesson


@router.get("/me/progress", response_model=List[CourseProgress])
async def my_progress(user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    return await learning_service.courses_with_progress(db, user["id"])


@router.post("/me/progress", response_model=ProgressOut)
async def update_my_progress(
    request: ProgressUpdate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    try:
        return await learning_service.update_progress(db, user["id"], request)
    except LearningError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/instructors", response_model=List[InstructorOut])
async def list_instructors(db: AsyncSession = Depends(get_session)):
    return await learning_service.list_instructors(db)


@router.get("/me/instructors", response_model=List[UserInstructorOut])
async def my_instructors(user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    return await learning_service.user_instructors(db, user["id"])


@router.post("/me/instructors", response_model=UserInstructorOut)
async def save_my_instructor(
    request: SaveInstructorRequest,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    try:
        await learning_service.save_user_instructor(db, user["id"], request)
    except LearningError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    saved = await learning_service.user_instructors(db, user["id"])
    return next(row for row in saved if row["id"] == request.instructor_id)


@router.get("/me/activity", response_model=List[ActivityOut])
async def my_activity(
    limit: int = Query(10, ge=1, le=100),
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    return await learning_service.activity_feed(db, user["id"], limit=limit)
