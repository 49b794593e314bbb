"""Project management routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from taskdesk.api.deps import DBSession, Locale, require_permission
from taskdesk.config import settings
from taskdesk.models import PermissionKey, User
from taskdesk.schemas.pagination import Page
from taskdesk.schemas.project import (
    ProjectArchiveRequest,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from taskdesk.services.project_service import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])

ProjectViewer = Annotated[User, Depends(require_permission(PermissionKey.PROJECT_VIEW))]
ProjectCreator = Annotated[User, Depends(require_permission(PermissionKey.PROJECT_CREATE))]
ProjectEditor = Annotated[User, Depends(require_permission(PermissionKey.PROJECT_UPDATE))]
ProjectDeleter = Annotated[User, Depends(require_permission(PermissionKey.PROJECT_DELETE))]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    current_user: ProjectCreator,
    db: DBSession,
    locale: Locale,
) -> ProjectResponse:
    """Create a new project."""
    project = await ProjectService(db).create(data)
    return ProjectResponse.from_project(project, locale)


@router.get("", response_model=Page[ProjectResponse])
async def list_projects(
    current_user: ProjectViewer,
    db: DBSession,
    locale: Locale,
    q: str | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.default_per_page, ge=1, le=settings.max_per_page),
) -> Page[ProjectResponse]:
    """List projects with search and pagination."""
    projects, bounds = await ProjectService(db).list_projects(q, page, per_page)
    return Page[ProjectResponse](
        data=[ProjectResponse.from_project(project, locale) for project in projects],
        **bounds,
    )


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    current_user: ProjectViewer,
    db: DBSession,
    locale: Locale,
) -> ProjectResponse:
    """Get a project."""
    project = await ProjectService(db).get_by_id(project_id)

    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )

    return ProjectResponse.from_project(project, locale)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    current_user: ProjectEditor,
    db: DBSession,
    locale: Locale,
) -> ProjectResponse:
    """Update a project."""
    project = await ProjectService(db).update(project_id, data)

    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )

    return ProjectResponse.from_project(project, locale)


@router.patch("/{project_id}/archive", response_model=ProjectResponse)
async def archive_project(
    project_id: UUID,
    current_user: ProjectEditor,
    db: DBSession,
    locale: Locale,
    data: ProjectArchiveRequest | None = None,
) -> ProjectResponse:
    """Archive a project (default) or restore it."""
    archive = data.archive if data else True
    project = await ProjectService(db).set_archived(project_id, archive)

    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )

    return ProjectResponse.from_project(project, locale)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    current_user: ProjectDeleter,
    db: DBSession,
) -> None:
    """Delete a project and its tasks."""
    deleted = await ProjectService(db).delete(project_id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
