"""Pydantic schemas for projects."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name_ar: str = Field(..., min_length=1, max_length=200)
    name_en: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    is_active: bool = True


class ProjectUpdate(BaseModel):
    """Schema for updating a project."""

    name_ar: str | None = Field(None, min_length=1, max_length=200)
    name_en: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    is_active: bool | None = None

    @field_validator("name_ar", "name_en", "is_active")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class ProjectArchiveRequest(BaseModel):
    """Schema for archiving (default) or restoring a project."""

    archive: bool = True


class ProjectResponse(BaseModel):
    """Schema for project response."""

    id: UUID
    name: str
    name_ar: str
    name_en: str
    description: str | None
    is_active: bool
    tasks_order_version: int
    created_at: datetime

    @classmethod
    def from_project(cls, project, locale: str) -> "ProjectResponse":
        """Build a response with the name resolved for a locale."""
        return cls(
            id=project.id,
            name=project.localized_name(locale),
            name_ar=project.name_ar,
            name_en=project.name_en,
            description=project.description,
            is_active=project.is_active,
            tasks_order_version=project.tasks_order_version,
            created_at=project.created_at,
        )


class ProjectSummary(BaseModel):
    """Schema for the project header of a task list."""

    id: UUID
    name: str
