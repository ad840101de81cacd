from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.database import get_session
from protohub.dependencies.auth import get_current_user
from protohub.dependencies.rate_limit import rate_limit
from protohub.models.tracker import Task
from protohub.schemas.tracker import ProjectCreate, ProjectOut, ProjectUpdate, TaskCreate, TaskOut, TaskUpdate
from protohub.services import tracker as tracker_service
from protohub.services.tracker import InvalidTaskError, PlanLimitError

logger = get_logger()
router = APIRouter(prefix="/api", tags=["tracker"])


async def _owned_project_or_404(db: AsyncSession, project_id: int, user: dict):
    project = await tracker_service.get_owned_project(db, project_id, user["id"])
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


async def _owned_task_or_404(db: AsyncSession, task_id: int, user: dict) -> Task:
    task = await tracker_service.get_task(db, task_id)
    if task is None or await tracker_service.get_owned_project(db, task.project_id, user["id"]) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("/projects", response_model=List[ProjectOut])
async def list_projects(user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    try:
        return await tracker_service.list_projects(db, user["id"])
    except Exception as e:
        logger.error("Failed to fetch projects", user_id=user["id"], error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch projects")


@router.post("/projects", response_model=ProjectOut, dependencies=[rate_limit(20, 60)])
async def create_project(
    request: ProjectCreate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    try:
        return await tracker_service.create_project(db, user["id"], user["plan"], request)
    except PlanLimitError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.as_detail())
    except Exception as e:
        logger.error("Create project failed", user_id=user["id"], error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create project")


@router.get("/projects/{project_id}", response_model=ProjectOut)
async def get_project(project_id: int, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    return await _owned_project_or_404(db, project_id, user)


@router.put("/projects/{project_id}", response_model=ProjectOut)
async def update_project(
    project_id: int,
    request: ProjectUpdate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    project = await _owned_project_or_404(db, project_id, user)
    return await tracker_service.update_project(db, project, request)


@router.delete("/projects/{project_id}")
async def delete_project(project_id: int, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    project = await _owned_project_or_404(db, project_id, user)
    await tracker_service.delete_project(db, project)
    return {"message": "Project deleted successfully"}


@router.get("/projects/{project_id}/tasks", response_model=List[TaskOut])
async def list_project_tasks(project_id: int, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    await _owned_project_or_404(db, project_id, user)
    return await tracker_service.list_project_tasks(db, project_id)


@router.post("/tasks", response_model=TaskOut, dependencies=[rate_limit(60, 60)])
async def create_task(
    request: TaskCreate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    await _owned_project_or_404(db, request.project_id, user)
    try:
        return await tracker_service.create_task(db, user["id"], user["plan"], request)
    except PlanLimitError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.as_detail())
    except Exception as e:
        logger.error("Create task failed", user_id=user["id"], project_id=request.project_id, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create task")


@router.put("/tasks/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: int,
    request: TaskUpdate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    task = await _owned_task_or_404(db, task_id, user)
    try:
        return await tracker_service.update_task(db, task, request)
    except InvalidTaskError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: int, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    task = await _owned_task_or_404(db, task_id, user)
    await tracker_service.delete_task(db, task)
    return {"message": "Task deleted successfully"}
