"""Reorderable task list of one project, kept in sync with the server."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from taskdesk.client.api_client import TaskdeskClient
from taskdesk.client.drag import DEFAULT_ROW_HEIGHT, DragSurface
from taskdesk.client.errors import TaskdeskError
from taskdesk.client.order_state import ClientOrderState, OrderSnapshot
from taskdesk.schemas.task import TaskResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """A message shown to the user (toast)."""

    level: str
    message: str


def log_notification(notification: Notification) -> None:
    level = logging.ERROR if notification.level == "error" else logging.INFO
    logger.log(level, notification.message)


class TaskListController:
    """Drives the drag surface and persists each completed reorder.

    The rendered order comes from ClientOrderState; task content always
    comes from the latest fetch.
    """

    def __init__(
        self,
        client: TaskdeskClient,
        project_id: UUID,
        notify: Callable[[Notification], None] | None = None,
        row_height: float = DEFAULT_ROW_HEIGHT,
        edit_mode: bool = False,
    ):
        self.client = client
        self.project_id = project_id
        self.notify = notify or log_notification
        self.order_state = ClientOrderState()
        self.drag = DragSurface(
            self.order_state,
            row_height=row_height,
            edit_mode=edit_mode,
            visible_ids=lambda: [task.id for task in self.tasks],
        )
        self.order_version: int | None = None
        self._items: dict[UUID, TaskResponse] = {}

    @property
    def tasks(self) -> list[TaskResponse]:
        """Tasks in display order."""
        return self.order_state.resolve(self._items)

    @property
    def edit_mode(self) -> bool:
        return self.drag.edit_mode

    @edit_mode.setter
    def edit_mode(self, enabled: bool) -> None:
        self.drag.edit_mode = enabled

    async def refresh(self) -> None:
        """Fetch the project's full ordered task list."""
        page = await self.client.get_project_tasks(self.project_id)
        self._items = {task.id: task for task in page.data}
        self.order_version = page.order_version
        self.order_state.initialize([task.id for task in page.data])

    def start_drag(self, task_id: UUID, y: float) -> bool:
        return self.drag.pointer_down(task_id, y)

    def move_drag(self, y: float) -> list[UUID]:
        return self.drag.pointer_move(y)

    def cancel_drag(self) -> None:
        self.drag.cancel()

    async def end_drag(self) -> bool:
        """Release the drag and persist the new order.

        Returns True when the server accepted the order. On failure the
        pre-drag order is restored and the list is refetched.
        """
        snapshot = self.drag.snapshot
        # Tasks removed since the drag started have no row to send
        task_ids = [i for i in self.drag.release() if i in self._items]

        try:
            result = await self.client.reorder_tasks(
                self.project_id, task_ids, expected_version=self.order_version
            )
        except TaskdeskError as e:
            logger.warning(f"Reorder of project {self.project_id} failed: {e.message}")
            self._revert(snapshot, e)
            await self._resync()
            return False

        self.order_version = result.order_version
        self.order_state.settle()
        self.notify(Notification("success", "Order updated"))
        await self._resync()
        return True

    async def delete_task(self, task_id: UUID) -> bool:
        """Delete a task, hiding it immediately."""
        snapshot = self.order_state.begin_change()
        self.order_state.forget(task_id)

        try:
            await self.client.delete_task(task_id)
        except TaskdeskError as e:
            logger.warning(f"Delete of task {task_id} failed: {e.message}")
            self._revert(snapshot, e)
            await self._resync()
            return False

        self._items.pop(task_id, None)
        self.order_state.settle()
        self.notify(Notification("success", "Task deleted"))
        await self._resync()
        return True

    def _revert(self, snapshot: OrderSnapshot, error: TaskdeskError) -> None:
        self.notify(Notification("error", error.message))
        self.order_state.rollback(snapshot)
        self.order_state.settle()

    async def _resync(self) -> None:
        try:
            await self.refresh()
        except TaskdeskError as e:
            logger.warning(f"Refetch of project {self.project_id} tasks failed: {e.message}")
            self.notify(Notification("error", f"Could not refresh tasks: {e.message}"))
