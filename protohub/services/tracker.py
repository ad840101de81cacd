from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.access.plans import can_create, limits_for, normalize_plan
from protohub.models.tracker import Project, Task
from protohub.schemas.tracker import ProjectCreate, ProjectUpdate, TaskCreate, TaskUpdate
from protohub.utils.dates import advance, as_utc, utcnow

logger = get_logger()


class PlanLimitError(Exception):
    def __init__(self, resource: str, plan: str, limit: int):
        super().__init__(f"{resource} limit reached for plan")
        self.message = f"{resource} limit reached for plan"
        self.plan = plan
        self.limit = limit

    def as_detail(self) -> dict:
        return {
            "message": self.message,
            "plan": self.plan,
            "limit": self.limit,
            "upgrade_required": True,
        }


class InvalidTaskError(ValueError):
    pass


async def list_projects(db: AsyncSession, owner_id: str) -> List[Project]:
    result = await db.execute(select(Project).where(Project.owner_id == owner_id).order_by(Project.id))
    return list(result.scalars().all())


async def get_owned_project(db: AsyncSession, project_id: int, owner_id: str) -> Optional[Project]:
    project = await db.get(Project, project_id)
    if project is None or project.owner_id != owner_id:
        return None
    return project


async def create_project(db: AsyncSession, owner_id: str, plan: str, request: ProjectCreate) -> Project:
    limit = limits_for(plan).max_projects
    count = (await db.execute(select(func.count(Project.id)).where(Project.owner_id == owner_id))).scalar_one()
    if not can_create(count, limit):
        logger.info("Project limit reached", owner_id=owner_id, plan=plan, count=count, limit=limit)
        raise PlanLimitError("Project", normalize_plan(plan), limit)

    project = Project(owner_id=owner_id, **request.model_dump())
    db.add(project)
    await db.commit()
    await db.refresh(project)
    logger.info("Project created", project_id=project.id, owner_id=owner_id)
    return project


async def update_project(db: AsyncSession, project: Project, request: ProjectUpdate) -> Project:
    for field, value in request.model_dump(exclude_unset=True).items():
        setattr(project, field, value)
    project.updated_at = utcnow()
    await db.commit()
    await db.refresh(project)
    return project


async def delete_project(db: AsyncSession, project: Project) -> None:
    project_id, owner_id = project.id, project.owner_id
    # Explicit task delete; SQLite ignores ON DELETE CASCADE unless foreign keys are enabled
    await db.execute(delete(Task).where(Task.project_id == project.id))
    await db.delete(project)
    await db.commit()
    logger.info("Project deleted", project_id=project_id, owner_id=owner_id)


async def list_project_tasks(db: AsyncSession, project_id: int) -> List[Task]:
    result = await db.execute(select(Task).where(Task.project_id == project_id).order_by(Task.id))
    return list(result.scalars().all())


async def create_task(db: AsyncSession, owner_id: str, plan: str, request: TaskCreate) -> Task:
    limit = limits_for(plan).max_tasks_per_project
    count = (await db.execute(select(func.count(Task.id)).where(Task.project_id == request.project_id))).scalar_one()
    if not can_create(count, limit):
        logger.info("Task limit reached", project_id=request.project_id, plan=plan, count=count, limit=limit)
        raise PlanLimitError("Task", normalize_plan(plan), limit)

    data = request.model_dump()
    data["status"] = request.status.value
    data["priority"] = request.priority.value
    data["recurrence_pattern"] = request.recurrence_pattern.value if request.recurrence_pattern else None
    task = Task(owner_id=owner_id, **data)
    db.add(task)
    await db.commit()
    await db.refresh(task)
    logger.info("Task created", task_id=task.id, project_id=task.project_id)
    return task


async def get_task(db: AsyncSession, task_id: int) -> Optional[Task]:
    return await db.get(Task, task_id)


def _next_occurrence(task: Task) -> Task:
    base = as_utc(task.due_date) if task.due_date is not None else utcnow()
    return Task(
        title=task.title,
        description=task.description,
        status="todo",
        priority=task.priority,
        due_date=advance(base, task.recurrence_pattern),
        project_id=task.project_id,
        assignee_id=task.assignee_id,
        owner_id=task.owner_id,
        progress=0,
        is_recurring=True,
        recurrence_pattern=task.recurrence_pattern,
    )


async def update_task(db: AsyncSession, task: Task, request: TaskUpdate) -> Task:
    changes = request.model_dump(exclude_unset=True)
    for key in ("status", "priority", "recurrence_pattern"):
        if changes.get(key) is not None:
            changes[key] = changes[key].value

    is_recurring = changes.get("is_recurring", task.is_recurring)
    pattern = changes["recurrence_pattern"] if "recurrence_pattern" in changes else task.recurrence_pattern
    if is_recurring and not pattern:
        raise InvalidTaskError("recurrence_pattern is required for recurring tasks")

    completing = changes.get("status") == "done" and task.status != "done"
    if changes.get("status") == "done" and changes.get("progress") is None:
        changes["progress"] = 100

    for field, value in changes.items():
        setattr(task, field, value)
    task.updated_at = utcnow()

    if completing and task.is_recurring:
        follow_up = _next_occurrence(task)
        db.add(follow_up)
        logger.info("Recurring task rescheduled", task_id=task.id, pattern=task.recurrence_pattern)

    await db.commit()
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, task: Task) -> None:
    await db.delete(task)
    await db.commit()
