"""Service for task operations and per-project task ordering."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.models import Project, Task, TaskStatus
from taskdesk.schemas.task import TaskCreate, TaskUpdate
from taskdesk.services.exceptions import NotFoundError, OrderMismatchError, StaleOrderError
from taskdesk.services.pagination import LIKE_ESCAPE, contains_pattern, paginate

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task CRUD and ordering operations.

    Every write that changes the membership or order of a project's tasks
    leaves their `order` values as 0..n-1 and bumps the project's
    `tasks_order_version`.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_project(self, project_id: UUID, lock: bool = False) -> Project:
        """Get a project or raise NotFoundError."""
        query = select(Project).where(Project.id == project_id)
        if lock:
            query = query.with_for_update()
        result = await self.db.execute(query)
        project = result.scalar_one_or_none()
        if not project:
            raise NotFoundError("Project not found")
        return project

    async def _ensure_status(self, status_id: UUID | None) -> None:
        """Validate that a task status exists."""
        if status_id is None:
            return
        result = await self.db.execute(
            select(TaskStatus.id).where(TaskStatus.id == status_id)
        )
        if result.scalar_one_or_none() is None:
            raise ValueError("Invalid task status")

    async def _get_next_order(self, project_id: UUID) -> int:
        """Get the next available order value in a project."""
        result = await self.db.execute(
            select(func.coalesce(func.max(Task.order), -1) + 1).where(
                Task.project_id == project_id
            )
        )
        return result.scalar() or 0

    async def list_for_project(
        self,
        project_id: UUID,
        q: str | None = None,
        status_id: UUID | None = None,
        page: int = 1,
        per_page: int | None = None,
    ) -> tuple[Project, list[Task], dict[str, int]]:
        """List a project's tasks in display order with optional filters."""
        project = await self._get_project(project_id)

        query = select(Task).where(Task.project_id == project_id)
        if q:
            pattern = contains_pattern(q)
            query = query.where(Task.title.ilike(pattern, escape=LIKE_ESCAPE))
        if status_id:
            query = query.where(Task.status_id == status_id)
        query = query.order_by(Task.order, Task.created_at)

        tasks, bounds = await paginate(self.db, query, page, per_page)
        return project, tasks, bounds

    async def get_by_id(self, task_id: UUID) -> Task | None:
        """Get a task by ID."""
        result = await self.db.execute(select(Task).where(Task.id == task_id))
        return result.scalar_one_or_none()

    async def create(self, data: TaskCreate, user_id: UUID) -> Task:
        """Create a task at the end of its project's order."""
        project = await self._get_project(data.project_id, lock=True)
        await self._ensure_status(data.status_id)

        task = Task(
            project_id=project.id,
            status_id=data.status_id,
            created_by_id=user_id,
            title=data.title,
            description=data.description,
            priority=data.priority,
            estimated_working_days=data.estimated_working_days,
            order=await self._get_next_order(project.id),
        )
        self.db.add(task)
        project.tasks_order_version += 1

        await self.db.flush()
        await self.db.refresh(task)

        return task

    async def update(self, task_id: UUID, data: TaskUpdate) -> Task | None:
        """Update a task's content fields."""
        task = await self.get_by_id(task_id)
        if not task:
            return None

        update_data = data.model_dump(exclude_unset=True)
        if "status_id" in update_data:
            await self._ensure_status(update_data["status_id"])

        for field, value in update_data.items():
            setattr(task, field, value)

        await self.db.flush()
        await self.db.refresh(task)

        return task

    async def set_status(self, task_id: UUID, status_id: UUID) -> Task | None:
        """Move a task to another status."""
        task = await self.get_by_id(task_id)
        if not task:
            return None

        await self._ensure_status(status_id)
        task.status_id = status_id

        await self.db.flush()
        await self.db.refresh(task)

        return task

    async def set_done(self, task_id: UUID, done: bool) -> Task | None:
        """Mark a task done or reopen it."""
        task = await self.get_by_id(task_id)
        if not task:
            return None

        task.done_at = datetime.now(timezone.utc) if done else None

        await self.db.flush()
        await self.db.refresh(task)

        return task

    async def delete(self, task_id: UUID) -> bool:
        """Delete a task and close the gap it leaves in the order."""
        task = await self.get_by_id(task_id)
        if not task:
            return False

        project = await self._get_project(task.project_id, lock=True)

        await self.db.delete(task)
        await self.db.flush()

        await self._recompact_order(project.id)
        project.tasks_order_version += 1
        await self.db.flush()

        return True

    async def reorder(
        self,
        project_id: UUID,
        task_ids: list[UUID],
        expected_version: int | None = None,
    ) -> Project:
        """Rewrite task order values from their position in `task_ids`.

        All-or-nothing: every check runs before any task is modified.
        """
        project = await self._get_project(project_id, lock=True)

        if expected_version is not None and expected_version != project.tasks_order_version:
            raise StaleOrderError(expected_version, project.tasks_order_version)

        if len(set(task_ids)) != len(task_ids):
            raise OrderMismatchError("Task order contains duplicate task IDs")

        result = await self.db.execute(
            select(Task).where(Task.project_id == project_id)
        )
        existing_tasks = {task.id: task for task in result.scalars().all()}

        # Validate all tasks exist and belong to this project
        for task_id in task_ids:
            if task_id not in existing_tasks:
                raise OrderMismatchError(f"Task {task_id} not found in this project")

        if len(task_ids) != len(existing_tasks):
            raise OrderMismatchError(
                f"Task order must list all {len(existing_tasks)} tasks of the project, "
                f"got {len(task_ids)}"
            )

        # Update order values
        changed = 0
        for idx, task_id in enumerate(task_ids):
            task = existing_tasks[task_id]
            if task.order != idx:
                task.order = idx
                changed += 1

        if changed:
            project.tasks_order_version += 1

        await self.db.flush()

        logger.info(
            f"Reordered project {project_id}: {changed} of {len(task_ids)} tasks moved "
            f"(version {project.tasks_order_version})"
        )
        return project

    async def _recompact_order(self, project_id: UUID) -> None:
        """Recompact order values after deletion to remove gaps."""
        result = await self.db.execute(
            select(Task)
            .where(Task.project_id == project_id)
            .order_by(Task.order, Task.created_at)
        )
        tasks = list(result.scalars().all())

        for idx, task in enumerate(tasks):
            if task.order != idx:
                task.order = idx

        await self.db.flush()
