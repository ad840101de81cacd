from typing import List, Optional

from redis.asyncio import Redis
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.cache import cached_json
from protohub.models.learning import ActivityEntry, AiInstructor, Course, Lesson, Subject, UserInstructor, UserProgress
from protohub.schemas.learning import CourseOut, InstructorOut, ProgressUpdate, SaveInstructorRequest, SubjectOut
from protohub.utils.dates import utcnow

logger = get_logger()


class LearningError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


async def list_subjects(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(Subject).order_by(Subject.id))
        return [SubjectOut.model_validate(row).model_dump(mode="json") for row in result.scalars().all()]
    return await cached_json(cache, "learning:subjects", load)


async def list_courses(db: AsyncSession, cache: Optional[Redis] = None, subject_id: Optional[int] = None) -> List[dict]:
    async def load():
        query = select(Course).order_by(Course.id)
        if subject_id is not None:
            query = query.where(Course.subject_id == subject_id)
        result = await db.execute(query)
        return [CourseOut.model_validate(row).model_dump(mode="json") for row in result.scalars().all()]
    return await cached_json(cache, f"learning:courses:{subject_id if subject_id is not None else 'all'}", load)


async def get_course(db: AsyncSession, course_id: int) -> Optional[Course]:
    return await db.get(Course, course_id)


async def get_lesson(db: AsyncSession, lesson_id: int) -> Optional[Lesson]:
    return await db.get(Lesson, lesson_id)


async def list_lessons(db: AsyncSession, course_id: int) -> List[Lesson]:
    result = await db.execute(select(Lesson).where(Lesson.course_id == course_id).order_by(Lesson.order))
    return list(result.scalars().all())


async def courses_with_progress(db: AsyncSession, user_id: str) -> List[dict]:
    """Every course, with the user's progress or zero when they have not started it."""
    courses = (await db.execute(select(Course).order_by(Course.id))).scalars().all()
    result = await db.execute(select(UserProgress).where(UserProgress.user_id == user_id))
    progress = {row.course_id: row for row in result.scalars().all()}

    rows = []
    for course in courses:
        mine = progress.get(course.id)
        rows.append({
            **CourseOut.model_validate(course).model_dump(),
            "percent_complete": mine.percent_complete if mine else 0,
            "last_lesson_id": mine.last_lesson_id if mine else None,
            "last_accessed": mine.last_accessed if mine else None,
        })
    return rows


def record_activity(
    db: AsyncSession,
    user_id: str,
    activity_type: str,
    resource_id: Optional[int] = None,
    resource_type: Optional[str] = None,
    details: Optional[dict] = None,
) -> ActivityEntry:
    entry = ActivityEntry(
        user_id=user_id,
        activity_type=activity_type,
        resource_id=resource_id,
        resource_type=resource_type,
        details=details,
        timestamp=utcnow(),
    )
    db.add(entry)
    return entry


async def update_progress(db: AsyncSession, user_id: str, request: ProgressUpdate) -> UserProgress:
    if await db.get(Course, request.course_id) is None:
        raise LearningError("Course not found", status_code=404)
    if request.last_lesson_id is not None:
        lesson = await db.get(Lesson, request.last_lesson_id)
        if lesson is None or lesson.course_id != request.course_id:
            raise LearningError("Lesson does not belong to this course")

    result = await db.execute(
        select(UserProgress).where(UserProgress.user_id == user_id, UserProgress.course_id == request.course_id)
    )
    progress = result.scalars().first()
    if progress is None:
        progress = UserProgress(user_id=user_id, course_id=request.course_id)
        db.add(progress)
    if request.last_lesson_id is not None:
        progress.last_lesson_id = request.last_lesson_id
    progress.percent_complete = request.percent_complete
    progress.last_accessed = utcnow()

    record_activity(
        db,
        user_id,
        "progress_update",
        resource_id=request.course_id,
        resource_type="course",
        details={"percent_complete": request.percent_complete},
    )
    await db.commit()
    await db.refresh(progress)
    logger.info("Course progress updated", user_id=user_id, course_id=request.course_id, percent=request.percent_complete)
    return progress


async def list_instructors(db: AsyncSession) -> List[AiInstructor]:
    result = await db.execute(select(AiInstructor).order_by(AiInstructor.id))
    return list(result.scalars().all())


async def user_instructors(db: AsyncSession, user_id: str) -> List[dict]:
    """The user's saved instructors, or every instructor uncustomized when none are saved."""
    result = await db.execute(
        select(UserInstructor, AiInstructor)
        .join(AiInstructor, AiInstructor.id == UserInstructor.instructor_id)
        .where(UserInstructor.user_id == user_id)
        .order_by(UserInstructor.id)
    )
    saved = result.all()
    if not saved:
        return [
            {**InstructorOut.model_validate(instructor).model_dump(), "is_customized": False, "custom_settings": None}
            for instructor in await list_instructors(db)
        ]
    return [
        {
            **InstructorOut.model_validate(instructor).model_dump(),
            "is_customized": choice.is_customized,
            "custom_settings": choice.custom_settings,
        }
        for choice, instructor in saved
    ]


async def save_user_instructor(db: AsyncSession, user_id: str, request: SaveInstructorRequest) -> UserInstructor:
    if await db.get(AiInstructor, request.instructor_id) is None:
        raise LearningError("Instructor not found", status_code=404)

    result = await db.execute(
        select(UserInstructor).where(
            UserInstructor.user_id == user_id, UserInstructor.instructor_id == request.instructor_id
        )
    )
    choice = result.scalars().first()
    if choice is None:
        choice = UserInstructor(user_id=user_id, instructor_id=request.instructor_id)
        db.add(choice)
    choice.is_customized = request.is_customized
    choice.custom_settings = request.custom_settings
    await db.commit()
    await db.refresh(choice)
    return choice


async def activity_feed(db: AsyncSession, user_id: str, limit: int = 10) -> List[ActivityEntry]:
    result = await db.execute(
        select(ActivityEntry)
        .where(ActivityEntry.user_id == user_id)
        .order_by(ActivityEntry.timestamp.desc(), ActivityEntry.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())
