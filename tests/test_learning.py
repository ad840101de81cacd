import json

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from conftest import MOCK_OTHER_USER, MOCK_USER
from protohub.core.database import async_session_maker
from protohub.main import app
from protohub.realtime.classroom import Classroom
from protohub.seed import AI_INSTRUCTORS, COURSES, SUBJECTS, seed_session


async def first_course(client, name="Advanced Mathematics"):
    courses = (await client.get("/api/courses")).json()
    return next(c for c in courses if c["name"] == name)


@pytest.mark.asyncio
async def test_subjects_and_courses(db, client):
    await seed_session(db)

    subjects = (await client.get("/api/subjects")).json()
    assert [s["code"] for s in subjects] == [s["code"] for s in SUBJECTS]

    math_id = subjects[0]["id"]
    math = (await client.get("/api/courses", params={"subject_id": math_id})).json()
    assert {c["name"] for c in math} == {c["name"] for c in COURSES if c["subject_id"] == 1}
    assert len((await client.get("/api/courses")).json()) == len(COURSES)


@pytest.mark.asyncio
async def test_course_detail_lists_lessons_in_order(db, client):
    await seed_session(db)
    course = await first_course(client)

    detail = (await client.get(f"/api/courses/{course['id']}")).json()
    assert [lesson["title"] for lesson in detail["lessons"]] == ["Limits and Continuity", "Differentiation", "Integration"]

    lesson = detail["lessons"][1]
    assert (await client.get(f"/api/lessons/{lesson['id']}")).json()["title"] == "Differentiation"

    response = await client.get("/api/courses/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Course not found"
    assert (await client.get("/api/lessons/999")).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_progress_is_tracked_per_user(db, client, login):
    await seed_session(db)
    course = await first_course(client)
    lessons = (await client.get(f"/api/courses/{course['id']}")).json()["lessons"]
    login(MOCK_USER)

    progress = (await client.get("/api/me/progress")).json()
    assert len(progress) == len(COURSES)
    assert all(p["percent_complete"] == 0 and p["last_accessed"] is None for p in progress)

    body = {"course_id": course["id"], "last_lesson_id": lessons[0]["id"], "percent_complete": 35}
    response = await client.post("/api/me/progress", json=body)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["percent_complete"] == 35

    mine = next(p for p in (await client.get("/api/me/progress")).json() if p["id"] == course["id"])
    assert (mine["percent_complete"], mine["last_lesson_id"]) == (35, lessons[0]["id"])

    activity = (await client.get("/api/me/activity")).json()
    assert [(a["activity_type"], a["resource_id"], a["details"]) for a in activity] == [
        ("progress_update", course["id"], {"percent_complete": 35})
    ]

    login(MOCK_OTHER_USER)
    assert (await client.get("/api/me/activity")).json() == []


@pytest.mark.asyncio
async def test_progress_validation(db, client, login):
    await seed_session(db)
    course = await first_course(client)
    other = await first_course(client, "English Literature")
    other_lesson = (await client.get(f"/api/courses/{other['id']}")).json()["lessons"][0]
    login(MOCK_USER)

    response = await client.post("/api/me/progress", json={"course_id": 999, "percent_complete": 10})
    assert response.status_code == status.HTTP_404_NOT_FOUND

    body = {"course_id": course["id"], "last_lesson_id": other_lesson["id"], "percent_complete": 10}
    response = await client.post("/api/me/progress", json=body)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Lesson does not belong to this course"

    response = await client.post("/api/me/progress", json={"course_id": course["id"], "percent_complete": 101})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_saved_instructors(db, client, login):
    await seed_session(db)
    instructors = (await client.get("/api/instructors")).json()
    assert [i["name"] for i in instructors] == [i["name"] for i in AI_INSTRUCTORS]
    login(MOCK_USER)

    defaults = (await client.get("/api/me/instructors")).json()
    assert len(defaults) == len(AI_INSTRUCTORS)
    assert not any(i["is_customized"] for i in defaults)

    body = {"instructor_id": instructors[2]["id"], "is_customized": True, "custom_settings": {"speed": "slow"}}
    response = await client.post("/api/me/instructors", json=body)
    assert response.status_code == status.HTTP_200_OK
    assert (response.json()["name"], response.json()["custom_settings"]) == ("Prof. María", {"speed": "slow"})

    body["custom_settings"] = {"speed": "fast"}
    await client.post("/api/me/instructors", json=body)
    saved = (await client.get("/api/me/instructors")).json()
    assert [(i["id"], i["custom_settings"]) for i in saved] == [(instructors[2]["id"], {"speed": "fast"})]

    response = await client.post("/api/me/instructors", json={"instructor_id": 999})
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_classroom_join_and_ask(db, client):
    await seed_session(db)
    course = await first_course(client)
    lesson = (await client.get(f"/api/courses/{course['id']}")).json()["lessons"][0]
    classroom = Classroom(async_session_maker)

    reply = await classroom.handle({"type": "ask-question", "question": "What is a limit?"})
    assert reply == {"type": "error", "error": "No active classroom session"}

    reply = await classroom.handle(
        {"type": "classroom-join", "userId": "user-1", "courseId": course["id"], "lessonId": lesson["id"]}
    )
    assert reply["type"] == "classroom-data"
    assert reply["data"]["course"]["name"] == "Advanced Mathematics"
    assert reply["data"]["lesson"]["title"] == "Limits and Continuity"

    reply = await classroom.handle({"type": "ask-question", "question": " What is a limit? ", "instructorId": 1})
    assert reply == {
        "type": "instructor-response",
        "data": {
            "question": "What is a limit?",
            "answer": 'This is a response to your question: "What is a limit?"',
            "instructorId": 1,
            "lessonId": lesson["id"],
        },
    }


@pytest.mark.asyncio
async def test_classroom_join_errors(db, client):
    await seed_session(db)
    course = await first_course(client)
    other = await first_course(client, "English Literature")
    other_lesson = (await client.get(f"/api/courses/{other['id']}")).json()["lessons"][0]
    classroom = Classroom(async_session_maker)

    join = {"type": "classroom-join", "courseId": 999, "lessonId": other_lesson["id"]}
    assert await classroom.handle(join) == {"type": "error", "error": "Course not found"}

    join = {"type": "classroom-join", "courseId": course["id"], "lessonId": other_lesson["id"]}
    assert await classroom.handle(join) == {"type": "error", "error": "Lesson not found"}

    join = {"type": "classroom-join", "courseId": "abc"}
    assert (await classroom.handle(join))["type"] == "error"
    assert classroom.session is None
    assert await classroom.handle({"type": "unknown"}) is None


def test_ws_question_without_classroom():
    client = TestClient(app)
    with client.websocket_connect("/ws") as websocket:
        websocket.send_text(json.dumps({"type": "ask-question", "question": "Hello?"}))
        assert websocket.receive_json() == {"type": "error", "error": "No active classroom session"}
    client.close()
