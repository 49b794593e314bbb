"""Pydantic schemas for task statuses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class TaskStatusCreate(BaseModel):
    """Schema for creating a task status."""

    name_ar: str = Field(..., min_length=1, max_length=100)
    name_en: str = Field(..., min_length=1, max_length=100)
    color: str = Field("#64748b", pattern=r"^#[0-9a-fA-F]{6}$")


class TaskStatusResponse(BaseModel):
    """Schema for task status response."""

    id: UUID
    name: str
    name_ar: str
    name_en: str
    color: str
    created_at: datetime

    @classmethod
    def from_status(cls, task_status, locale: str) -> "TaskStatusResponse":
        """Build a response with the name resolved for a locale."""
        return cls(
            id=task_status.id,
            name=task_status.localized_name(locale),
            name_ar=task_status.name_ar,
            name_en=task_status.name_en,
            color=task_status.color,
            created_at=task_status.created_at,
        )
