"""Service for the task status lookup list."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.models import TaskStatus
from taskdesk.schemas.task_status import TaskStatusCreate
from taskdesk.services.pagination import LIKE_ESCAPE, contains_pattern, paginate


class TaskStatusService:
    """Service for task status operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: TaskStatusCreate) -> TaskStatus:
        """Create a task status."""
        task_status = TaskStatus(
            name_ar=data.name_ar,
            name_en=data.name_en,
            color=data.color,
        )
        self.db.add(task_status)
        await self.db.flush()
        await self.db.refresh(task_status)

        return task_status

    async def list_statuses(
        self,
        q: str | None = None,
        page: int = 1,
        per_page: int = 15,
    ) -> tuple[list[TaskStatus], dict[str, int]]:
        """List task statuses, newest first."""
        query = select(TaskStatus)
        if q:
            pattern = contains_pattern(q)
            query = query.where(
                or_(
                    TaskStatus.name_ar.ilike(pattern, escape=LIKE_ESCAPE),
                    TaskStatus.name_en.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        query = query.order_by(TaskStatus.created_at.desc(), TaskStatus.id)

        return await paginate(self.db, query, page, per_page)
