"""Task status lookup list routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from taskdesk.api.deps import CurrentUser, DBSession, Locale, require_permission
from taskdesk.config import settings
from taskdesk.models import PermissionKey, User
from taskdesk.schemas.pagination import Page
from taskdesk.schemas.task_status import TaskStatusCreate, TaskStatusResponse
from taskdesk.services.task_status_service import TaskStatusService

router = APIRouter(prefix="/task-statuses", tags=["task-statuses"])

ListCreator = Annotated[User, Depends(require_permission(PermissionKey.LIST_CREATE))]


@router.get("", response_model=Page[TaskStatusResponse])
async def list_task_statuses(
    current_user: CurrentUser,
    db: DBSession,
    locale: Locale,
    q: str | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.default_per_page, ge=1, le=settings.max_per_page),
) -> Page[TaskStatusResponse]:
    """List task statuses with search and pagination."""
    statuses, bounds = await TaskStatusService(db).list_statuses(q, page, per_page)
    return Page[TaskStatusResponse](
        data=[TaskStatusResponse.from_status(s, locale) for s in statuses],
        **bounds,
    )


@router.post("", response_model=TaskStatusResponse, status_code=status.HTTP_201_CREATED)
async def create_task_status(
    data: TaskStatusCreate,
    current_user: ListCreator,
    db: DBSession,
    locale: Locale,
) -> TaskStatusResponse:
    """Create a task status."""
    task_status = await TaskStatusService(db).create(data)
    return TaskStatusResponse.from_status(task_status, locale)
