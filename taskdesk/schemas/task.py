"""Pydantic schemas for tasks and task ordering."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from taskdesk.models.task import TaskPriority
from taskdesk.schemas.pagination import Page
from taskdesk.schemas.project import ProjectSummary


class TaskCreate(BaseModel):
    """Schema for creating a task."""

    project_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status_id: UUID | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    estimated_working_days: int | None = Field(None, ge=0)


class TaskUpdate(BaseModel):
    """Schema for updating a task."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status_id: UUID | None = None
    priority: TaskPriority | None = None
    estimated_working_days: int | None = Field(None, ge=0)

    @field_validator("title", "priority")
    @classmethod
    def reject_null(cls, value):
        """Omit a field to keep it; null is not a value for it."""
        if value is None:
            raise ValueError("may not be null")
        return value


class TaskStatusChange(BaseModel):
    """Schema for moving a task to another status."""

    status_id: UUID


class TaskDoneRequest(BaseModel):
    """Schema for marking a task done or not done."""

    done: bool = True


class TaskResponse(BaseModel):
    """Schema for task response."""

    id: UUID
    project_id: UUID
    status_id: UUID | None
    created_by_id: UUID | None
    title: str
    description: str | None
    priority: TaskPriority
    estimated_working_days: int | None
    order: int
    done_at: datetime | None
    is_done: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ProjectTaskPage(Page[TaskResponse]):
    """Schema for a project's ordered task list."""

    project: ProjectSummary
    order_version: int


class TaskOrderRequest(BaseModel):
    """Schema for rewriting the order of a project's tasks.

    `task_ids` must hold every task of the project exactly once. When
    `expected_version` is given the write is rejected if the project's order
    changed since that version was read.
    """

    task_ids: list[UUID]
    expected_version: int | None = Field(None, ge=0)


class TaskReorderRequest(TaskOrderRequest):
    """Schema for reordering with the project named in the body."""

    project_id: UUID


class TaskOrderResponse(BaseModel):
    """Schema for reorder response."""

    success: bool = True
    order_version: int
