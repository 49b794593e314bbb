"""HTTP client for the Taskdesk API."""

import logging
from typing import Any
from uuid import UUID

import httpx

from taskdesk.client.errors import NetworkError, error_for_response
from taskdesk.client.table import TableQuery
from taskdesk.schemas.pagination import Page
from taskdesk.schemas.project import ProjectResponse
from taskdesk.schemas.task import ProjectTaskPage, TaskOrderResponse
from taskdesk.schemas.task_status import TaskStatusResponse

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class TaskdeskClient:
    """Client for the Taskdesk REST API.

    Each call opens its own `httpx.AsyncClient`; `transport` lets callers
    route requests in-process (e.g. `httpx.ASGITransport`).
    """

    def __init__(
        self,
        base_url: str,
        access_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
        locale: str = "en",
    ):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.transport = transport
        self.timeout = timeout
        self.locale = locale

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and raise a TaskdeskError subclass on failure."""
        cookies = {"access_token": self.access_token} if self.access_token else None

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                transport=self.transport,
                timeout=self.timeout,
                cookies=cookies,
                headers={"Accept-Language": self.locale},
            ) as client:
                response = await client.request(method, f"{API_PREFIX}{path}", **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            raise NetworkError(f"Could not reach the server: {e}") from e

        if response.is_error:
            error = error_for_response(response)
            logger.info(f"{method} {path} returned {response.status_code}: {error.message}")
            raise error

        return response

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Log in and keep the session token for later calls."""
        response = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        self.access_token = response.cookies.get("access_token")
        return response.json()

    async def get_project_tasks(
        self, project_id: UUID, query: TableQuery | None = None
    ) -> ProjectTaskPage:
        """Fetch a project's tasks in display order (all of them by default)."""
        params = query.to_params() if query else {}
        response = await self._request("GET", f"/projects/{project_id}/tasks", params=params)
        return ProjectTaskPage.model_validate(response.json())

    async def reorder_tasks(
        self,
        project_id: UUID,
        task_ids: list[UUID],
        expected_version: int | None = None,
    ) -> TaskOrderResponse:
        """Persist the full order of a project's tasks."""
        payload: dict[str, Any] = {"task_ids": [str(task_id) for task_id in task_ids]}
        if expected_version is not None:
            payload["expected_version"] = expected_version

        response = await self._request(
            "PATCH", f"/projects/{project_id}/tasks/order", json=payload
        )
        return TaskOrderResponse.model_validate(response.json())

    async def delete_task(self, task_id: UUID) -> None:
        """Delete a task."""
        await self._request("DELETE", f"/tasks/{task_id}")

    async def list_projects(self, query: TableQuery) -> Page[ProjectResponse]:
        """Fetch one page of projects."""
        response = await self._request("GET", "/projects", params=query.to_params())
        return Page[ProjectResponse].model_validate(response.json())

    async def list_task_statuses(self, query: TableQuery) -> Page[TaskStatusResponse]:
        """Fetch one page of task statuses."""
        response = await self._request("GET", "/task-statuses", params=query.to_params())
        return Page[TaskStatusResponse].model_validate(response.json())
