
import pytest
from fastapi import status
from sqlalchemy import func, select

from conftest import MOCK_OTHER_USER, MOCK_PRO_USER, MOCK_USER
from protohub.models.tracker import Project, Task


async def create_project(client, name="Launch"):
    response = await client.post("/api/projects", json={"name": name})
    assert response.status_code == status.HTTP_200_OK
    return response.json()


async def create_task(client, project_id, **fields):
    body = {"title": "Write copy", "project_id": project_id}
    body.update(fields)
    return await client.post("/api/tasks", json=body)


@pytest.mark.asyncio
async def test_create_and_list_projects(client, login):
    login(MOCK_USER)
    project = await create_project(client)
    assert project["color"] == "#0EA5E9"
    assert project["owner_id"] == MOCK_USER["id"]

    projects = (await client.get("/api/projects")).json()
    assert [p["id"] for p in projects] == [project["id"]]


@pytest.mark.asyncio
async def test_free_plan_project_limit(client, login):
    login(MOCK_USER)
    await create_project(client, "One")
    await create_project(client, "Two")

    response = await client.post("/api/projects", json={"name": "Three"})
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == {
        "message": "Project limit reached for plan",
        "plan": "free",
        "limit": 2,
        "upgrade_required": True,
    }


@pytest.mark.asyncio
async def test_pro_plan_is_unlimited(client, login):
    login(MOCK_PRO_USER)
    for name in ("One", "Two", "Three"):
        await create_project(client, name)
    assert len((await client.get("/api/projects")).json()) == 3


@pytest.mark.asyncio
async def test_project_color_must_be_hex(client, login):
    login(MOCK_USER)
    response = await client.post("/api/projects", json={"name": "Launch", "color": "blue"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_projects_are_private_to_owner(client, login):
    login(MOCK_USER)
    project = await create_project(client)

    login(MOCK_OTHER_USER)
    for method in ("get", "delete"):
        response = await getattr(client, method)(f"/api/projects/{project['id']}")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Project not found"
    update = await client.put(f"/api/projects/{project['id']}", json={"name": "Mine now"})
    assert update.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_update_project_is_partial(client, login):
    login(MOCK_USER)
    project = await create_project(client)

    response = await client.put(f"/api/projects/{project['id']}", json={"description": "Q3 launch"})
    assert response.status_code == status.HTTP_200_OK
    updated = response.json()
    assert updated["name"] == "Launch"
    assert updated["description"] == "Q3 launch"
    assert updated["updated_at"] >= project["updated_at"]


@pytest.mark.asyncio
async def test_delete_project_removes_tasks(client, db, login):
    login(MOCK_USER)
    project = await create_project(client)
    await create_task(client, project["id"])
    await create_task(client, project["id"], title="Review")

    response = await client.delete(f"/api/projects/{project['id']}")
    assert response.json() == {"message": "Project deleted successfully"}

    remaining = (await db.execute(select(func.count(Task.id)))).scalar_one()
    assert remaining == 0
    assert (await client.get(f"/api/projects/{project['id']}/tasks")).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_create_task_requires_owned_project(client, login):
    login(MOCK_USER)
    project = await create_project(client)

    login(MOCK_OTHER_USER)
    response = await create_task(client, project["id"])
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_task_validation(client, login):
    login(MOCK_USER)
    project = await create_project(client)

    assert (await create_task(client, project["id"], progress=101)).status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert (await create_task(client, project["id"], is_recurring=True)).status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_free_plan_task_limit(client, db, login):
    login(MOCK_USER)
    project = await create_project(client)
    db.add_all([Task(title=f"Task {i}", project_id=project["id"], owner_id=MOCK_USER["id"]) for i in range(50)])
    await db.commit()

    response = await create_task(client, project["id"])
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"]["message"] == "Task limit reached for plan"
    assert response.json()["detail"]["limit"] == 50


@pytest.mark.asyncio
async def test_list_project_tasks(client, login):
    login(MOCK_USER)
    project = await create_project(client)
    await create_task(client, project["id"], title="First")
    await create_task(client, project["id"], title="Second", priority="high")

    tasks = (await client.get(f"/api/projects/{project['id']}/tasks")).json()
    assert [t["title"] for t in tasks] == ["First", "Second"]
    assert tasks[1]["priority"] == "high"
    assert tasks[0]["status"] == "todo"


@pytest.mark.asyncio
async def test_completing_task_sets_progress(client, login):
    login(MOCK_USER)
    project = await create_project(client)
    task = (await create_task(client, project["id"])).json()

    response = await client.put(f"/api/tasks/{task['id']}", json={"status": "done"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["progress"] == 100

    tasks = (await client.get(f"/api/projects/{project['id']}/tasks")).json()
    assert len(tasks) == 1


@pytest.mark.asyncio
async def test_completing_recurring_task_schedules_next(client, login):
    login(MOCK_USER)
    project = await create_project(client)
    task = (await create_task(
        client,
        project["id"],
        title="Weekly report",
        due_date="2030-01-31T09:00:00Z",
        is_recurring=True,
        recurrence_pattern="monthly",
    )).json()

    await client.put(f"/api/tasks/{task['id']}", json={"status": "done"})

    tasks = (await client.get(f"/api/projects/{project['id']}/tasks")).json()
    assert len(tasks) == 2
    follow_up = tasks[1]
    assert follow_up["status"] == "todo"
    assert follow_up["progress"] == 0
    assert follow_up["recurrence_pattern"] == "monthly"
    assert follow_up["due_date"].startswith("2030-02-28T09:00:00")


@pytest.mark.asyncio
async def test_update_task_rejects_recurring_without_pattern(client, login):
    login(MOCK_USER)
    project = await create_project(client)
    task = (await create_task(client, project["id"])).json()

    response = await client.put(f"/api/tasks/{task['id']}", json={"is_recurring": True})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_tasks_are_private_to_project_owner(client, login):
    login(MOCK_USER)
    project = await create_project(client)
    task = (await create_task(client, project["id"])).json()

    login(MOCK_OTHER_USER)
    assert (await client.put(f"/api/tasks/{task['id']}", json={"title": "x"})).status_code == status.HTTP_404_NOT_FOUND
    assert (await client.delete(f"/api/tasks/{task['id']}")).status_code == status.HTTP_404_NOT_FOUND

    login(MOCK_USER)
    response = await client.delete(f"/api/tasks/{task['id']}")
    assert response.json() == {"message": "Task deleted successfully"}


@pytest.mark.asyncio
async def test_update_rejects_null_for_required_fields(client, login):
    login(MOCK_USER)
    project = await create_project(client)
    task = (await create_task(client, project["id"])).json()

    for body in ({"name": None}, {"color": None}):
        response = await client.put(f"/api/projects/{project['id']}", json=body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    for body in ({"title": None}, {"status": None}, {"priority": None}, {"progress": None}, {"is_recurring": None}):
        response = await client.put(f"/api/tasks/{task['id']}", json=body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    response = await client.put(f"/api/tasks/{task['id']}", json={"description": None, "due_date": None})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == "Write copy"
