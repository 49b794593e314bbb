"""Task routes, including per-project ordering."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.api.deps import DBSession, Locale, require_permission
from taskdesk.config import settings
from taskdesk.models import PermissionKey, Task, User
from taskdesk.schemas.project import ProjectSummary
from taskdesk.schemas.task import (
    ProjectTaskPage,
    TaskCreate,
    TaskDoneRequest,
    TaskOrderRequest,
    TaskOrderResponse,
    TaskReorderRequest,
    TaskResponse,
    TaskStatusChange,
    TaskUpdate,
)
from taskdesk.services.exceptions import NotFoundError, StaleOrderError
from taskdesk.services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])
project_tasks_router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["tasks"])

TaskViewer = Annotated[User, Depends(require_permission(PermissionKey.TASK_VIEW))]
TaskCreator = Annotated[User, Depends(require_permission(PermissionKey.TASK_CREATE))]
TaskEditor = Annotated[User, Depends(require_permission(PermissionKey.TASK_UPDATE))]
TaskDeleter = Annotated[User, Depends(require_permission(PermissionKey.TASK_DELETE))]
TaskCompleter = Annotated[User, Depends(require_permission(PermissionKey.TASK_COMPLETE))]


async def _reorder(
    db: AsyncSession, project_id: UUID, data: TaskOrderRequest
) -> TaskOrderResponse:
    """Apply a reorder request and map service errors to HTTP errors."""
    service = TaskService(db)

    try:
        project = await service.reorder(project_id, data.task_ids, data.expected_version)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except StaleOrderError as e:
        logger.warning(f"Rejected stale reorder of project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except ValueError as e:
        logger.warning(f"Rejected reorder of project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return TaskOrderResponse(order_version=project.tasks_order_version)


@project_tasks_router.get("", response_model=ProjectTaskPage)
async def list_project_tasks(
    project_id: UUID,
    current_user: TaskViewer,
    db: DBSession,
    locale: Locale,
    q: str | None = None,
    status_id: UUID | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    per_page: int | None = Query(None, ge=1, le=settings.max_per_page),
) -> ProjectTaskPage:
    """List a project's tasks in display order.

    Without `per_page` the whole collection is returned as one page.
    """
    service = TaskService(db)

    try:
        project, tasks, bounds = await service.list_for_project(
            project_id, q, status_id, page, per_page
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    return ProjectTaskPage(
        data=[TaskResponse.model_validate(task) for task in tasks],
        project=ProjectSummary(id=project.id, name=project.localized_name(locale)),
        order_version=project.tasks_order_version,
        **bounds,
    )


@project_tasks_router.patch("/order", response_model=TaskOrderResponse)
async def set_project_task_order(
    project_id: UUID,
    data: TaskOrderRequest,
    current_user: TaskEditor,
    db: DBSession,
) -> TaskOrderResponse:
    """Persist the full order of a project's tasks."""
    return await _reorder(db, project_id, data)


@router.patch("/reorder", response_model=TaskOrderResponse)
async def reorder_tasks(
    data: TaskReorderRequest,
    current_user: TaskEditor,
    db: DBSession,
) -> TaskOrderResponse:
    """Persist the full order of the tasks of the project named in the body."""
    return await _reorder(db, data.project_id, data)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    current_user: TaskCreator,
    db: DBSession,
) -> Task:
    """Create a task at the end of its project."""
    service = TaskService(db)

    try:
        return await service.create(data, current_user.id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    data: TaskUpdate,
    current_user: TaskEditor,
    db: DBSession,
) -> Task:
    """Update a task."""
    service = TaskService(db)

    try:
        task = await service.update(task_id, data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found",
        )

    return task


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def set_task_status(
    task_id: UUID,
    data: TaskStatusChange,
    current_user: TaskEditor,
    db: DBSession,
) -> Task:
    """Move a task to another status."""
    service = TaskService(db)

    try:
        task = await service.set_status(task_id, data.status_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found",
        )

    return task


@router.patch("/{task_id}/done", response_model=TaskResponse)
async def set_task_done(
    task_id: UUID,
    current_user: TaskCompleter,
    db: DBSession,
    data: TaskDoneRequest | None = None,
) -> Task:
    """Mark a task done (default) or reopen it."""
    done = data.done if data else True
    task = await TaskService(db).set_done(task_id, done)

    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found",
        )

    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    current_user: TaskDeleter,
    db: DBSession,
) -> None:
    """Delete a task."""
    deleted = await TaskService(db).delete(task_id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found",
        )
