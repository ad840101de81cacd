"""
Classroom question channel carried on ``/ws``.

A client sends ``classroom-join`` with ``courseId`` and ``lessonId`` and gets
``classroom-data`` back; ``ask-question`` messages are then answered with an
``instructor-response``. Each WebSocket connection owns one ``Classroom``.
"""
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker
from structlog import get_logger

from protohub.schemas.learning import CourseOut, LessonOut
from protohub.services import learning as learning_service

logger = get_logger()

CLASSROOM_MESSAGES = ("classroom-join", "ask-question")


def _error(message: str) -> Dict[str, Any]:
    return {"type": "error", "error": message}


class Classroom:
    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory
        self.session: Optional[Dict[str, Any]] = None

    async def handle(self, message: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if message.get("type") == "classroom-join":
            return await self.join(message)
        if message.get("type") == "ask-question":
            return self.ask(message)
        return None

    async def join(self, message: Dict[str, Any]) -> Dict[str, Any]:
        course_id, lesson_id = message.get("courseId"), message.get("lessonId")
        if not isinstance(course_id, int) or not isinstance(lesson_id, int):
            return _error("courseId and lessonId are required")

        async with self.session_factory() as db:
            course = await learning_service.get_course(db, course_id)
            lesson = await learning_service.get_lesson(db, lesson_id)
        if course is None:
            return _error("Course not found")
        if lesson is None or lesson.course_id != course.id:
            return _error("Lesson not found")

        self.session = {"user_id": message.get("userId"), "course_id": course.id, "lesson_id": lesson.id}
        logger.info("Classroom joined", course_id=course.id, lesson_id=lesson.id)
        return {
            "type": "classroom-data",
            "data": {
                "course": CourseOut.model_validate(course).model_dump(mode="json"),
                "lesson": LessonOut.model_validate(lesson).model_dump(mode="json"),
            },
        }

    def ask(self, message: Dict[str, Any]) -> Dict[str, Any]:
        if self.session is None:
            return _error("No active classroom session")
        question = str(message.get("question") or "").strip()
        if not question:
            return _error("question is required")
        return {
            "type": "instructor-response",
            "data": {
                "question": question,
                "answer": f'This is a response to your question: "{question}"',
                "instructorId": message.get("instructorId"),
                "lessonId": self.session["lesson_id"],
            },
        }
