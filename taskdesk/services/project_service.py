"""Service for project operations."""

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.models import Project
from taskdesk.schemas.project import ProjectCreate, ProjectUpdate
from taskdesk.services.pagination import LIKE_ESCAPE, contains_pattern, paginate


class ProjectService:
    """Service for project CRUD operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: ProjectCreate) -> Project:
        """Create a new project."""
        project = Project(
            name_ar=data.name_ar,
            name_en=data.name_en,
            description=data.description,
            is_active=data.is_active,
        )
        self.db.add(project)
        await self.db.flush()
        await self.db.refresh(project)

        return project

    async def get_by_id(self, project_id: UUID) -> Project | None:
        """Get a project by ID."""
        result = await self.db.execute(select(Project).where(Project.id == project_id))
        return result.scalar_one_or_none()

    async def list_projects(
        self,
        q: str | None = None,
        page: int = 1,
        per_page: int = 15,
    ) -> tuple[list[Project], dict[str, int]]:
        """List projects, newest first, optionally searching both names."""
        query = select(Project)
        if q:
            pattern = contains_pattern(q)
            query = query.where(
                or_(
                    Project.name_ar.ilike(pattern, escape=LIKE_ESCAPE),
                    Project.name_en.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        query = query.order_by(Project.created_at.desc(), Project.id)

        return await paginate(self.db, query, page, per_page)

    async def update(self, project_id: UUID, data: ProjectUpdate) -> Project | None:
        """Update a project's fields."""
        project = await self.get_by_id(project_id)
        if not project:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(project, field, value)

        await self.db.flush()
        await self.db.refresh(project)

        return project

    async def set_archived(self, project_id: UUID, archived: bool) -> Project | None:
        """Archive a project or bring it back; archived projects are inactive."""
        project = await self.get_by_id(project_id)
        if not project:
            return None

        project.is_active = not archived

        await self.db.flush()
        await self.db.refresh(project)

        return project

    async def delete(self, project_id: UUID) -> bool:
        """Delete a project together with its tasks."""
        project = await self.get_by_id(project_id)
        if not project:
            return False

        await self.db.delete(project)
        await self.db.flush()

        return True
