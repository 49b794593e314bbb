"""Tests for task CRUD and the ordered project task list."""

import uuid

import pytest


@pytest.fixture
async def project(make_project):
    return await make_project(name_en="Website", name_ar="الموقع")


def tasks_url(project) -> str:
    return f"/api/v1/projects/{project.id}/tasks"


class TestCreateTask:

    async def test_appends_to_end_of_order(self, admin_client, project, make_tasks, order_version):
        await make_tasks(project, "A", "B")

        response = await admin_client.post(
            "/api/v1/tasks", json={"project_id": str(project.id), "title": "C"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["order"] == 2
        assert body["priority"] == "medium"
        assert body["done_at"] is None
        assert await order_version(project) == 1

    async def test_first_task_gets_order_zero(self, admin_client, project):
        response = await admin_client.post(
            "/api/v1/tasks", json={"project_id": str(project.id), "title": "Only"}
        )

        assert response.json()["order"] == 0

    async def test_records_creator(self, admin_client, admin, project):
        response = await admin_client.post(
            "/api/v1/tasks", json={"project_id": str(project.id), "title": "Mine"}
        )

        assert response.json()["created_by_id"] == str(admin.id)

    async def test_unknown_project(self, admin_client):
        response = await admin_client.post(
            "/api/v1/tasks", json={"project_id": str(uuid.uuid4()), "title": "Lost"}
        )

        assert response.status_code == 404

    async def test_unknown_status(self, admin_client, project):
        response = await admin_client.post(
            "/api/v1/tasks",
            json={"project_id": str(project.id), "title": "T", "status_id": str(uuid.uuid4())},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid task status"

    async def test_blank_title_is_rejected(self, admin_client, project):
        response = await admin_client.post(
            "/api/v1/tasks", json={"project_id": str(project.id), "title": ""}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Validation failed"

    async def test_viewer_cannot_create(self, viewer, make_client, project):
        async with make_client(viewer) as client:
            response = await client.post(
                "/api/v1/tasks", json={"project_id": str(project.id), "title": "T"}
            )

        assert response.status_code == 403


class TestDeleteTask:

    async def test_recompacts_order(self, admin_client, project, make_tasks, task_orders):
        _, b, _, _ = await make_tasks(project, "A", "B", "C", "D")

        response = await admin_client.delete(f"/api/v1/tasks/{b.id}")

        assert response.status_code == 204
        assert await task_orders(project) == {"A": 0, "C": 1, "D": 2}

    async def test_bumps_order_version(self, admin_client, project, make_tasks, order_version):
        (a,) = await make_tasks(project, "A")

        await admin_client.delete(f"/api/v1/tasks/{a.id}")

        assert await order_version(project) == 1

    async def test_unknown_task(self, admin_client):
        response = await admin_client.delete(f"/api/v1/tasks/{uuid.uuid4()}")

        assert response.status_code == 404


class TestUpdateTask:

    async def test_updates_only_given_fields(self, admin_client, project, make_tasks):
        (task,) = await make_tasks(project, "Draft")

        response = await admin_client.patch(
            f"/api/v1/tasks/{task.id}", json={"priority": "high"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["priority"] == "high"
        assert body["title"] == "Draft"
        assert body["order"] == 0

    async def test_assigns_status(self, admin_client, project, make_tasks, make_status):
        (task,) = await make_tasks(project, "Draft")
        task_status = await make_status()

        response = await admin_client.patch(
            f"/api/v1/tasks/{task.id}", json={"status_id": str(task_status.id)}
        )

        assert response.json()["status_id"] == str(task_status.id)

    async def test_null_title_is_rejected(self, admin_client, project, make_tasks):
        (task,) = await make_tasks(project, "Draft")

        response = await admin_client.patch(f"/api/v1/tasks/{task.id}", json={"title": None})

        assert response.status_code == 400
        assert response.json()["detail"] == "Validation failed"

    async def test_null_priority_is_rejected(self, admin_client, project, make_tasks):
        (task,) = await make_tasks(project, "Draft")

        response = await admin_client.patch(f"/api/v1/tasks/{task.id}", json={"priority": None})

        assert response.status_code == 400

    async def test_null_description_clears_it(self, admin_client, project, make_tasks):
        (task,) = await make_tasks(project, "Draft")
        await admin_client.patch(f"/api/v1/tasks/{task.id}", json={"description": "Notes"})

        response = await admin_client.patch(f"/api/v1/tasks/{task.id}", json={"description": None})

        assert response.status_code == 200
        assert response.json()["description"] is None

    async def test_unknown_task(self, admin_client):
        response = await admin_client.patch(f"/api/v1/tasks/{uuid.uuid4()}", json={"title": "X"})

        assert response.status_code == 404


class TestTaskStatusChange:

    async def test_moves_task_to_status(self, admin_client, project, make_tasks, make_status):
        (task,) = await make_tasks(project, "Draft")
        task_status = await make_status()

        response = await admin_client.patch(
            f"/api/v1/tasks/{task.id}/status", json={"status_id": str(task_status.id)}
        )

        assert response.status_code == 200
        assert response.json()["status_id"] == str(task_status.id)

    async def test_unknown_status(self, admin_client, project, make_tasks):
        (task,) = await make_tasks(project, "Draft")

        response = await admin_client.patch(
            f"/api/v1/tasks/{task.id}/status", json={"status_id": str(uuid.uuid4())}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid task status"

    async def test_unknown_task(self, admin_client, make_status):
        task_status = await make_status()

        response = await admin_client.patch(
            f"/api/v1/tasks/{uuid.uuid4()}/status", json={"status_id": str(task_status.id)}
        )

        assert response.status_code == 404


class TestTaskDone:

    async def test_marks_done(self, admin_client, project, make_tasks):
        (task,) = await make_tasks(project, "Ship")

        response = await admin_client.patch(f"/api/v1/tasks/{task.id}/done")

        assert response.status_code == 200
        assert response.json()["done_at"] is not None
        assert response.json()["is_done"] is True

    async def test_reopens(self, admin_client, project, make_tasks):
        (task,) = await make_tasks(project, "Ship")
        await admin_client.patch(f"/api/v1/tasks/{task.id}/done")

        response = await admin_client.patch(
            f"/api/v1/tasks/{task.id}/done", json={"done": False}
        )

        assert response.json()["done_at"] is None
        assert response.json()["is_done"] is False


class TestListProjectTasks:

    async def test_returns_all_tasks_in_order_by_default(self, admin_client, project, make_tasks):
        await make_tasks(project, *[f"Task {i}" for i in range(20)])

        response = await admin_client.get(tasks_url(project))

        body = response.json()
        assert response.status_code == 200
        assert [task["order"] for task in body["data"]] == list(range(20))
        assert body["total"] == 20
        assert body["last_page"] == 1
        assert body["order_version"] == 0

    async def test_includes_localized_project_name(self, admin_client, project):
        english = await admin_client.get(tasks_url(project))
        arabic = await admin_client.get(tasks_url(project), headers={"Accept-Language": "ar"})

        assert english.json()["project"]["name"] == "Website"
        assert arabic.json()["project"]["name"] == "الموقع"

    async def test_paginates(self, admin_client, project, make_tasks):
        await make_tasks(project, "A", "B", "C", "D", "E")

        response = await admin_client.get(tasks_url(project), params={"page": 2, "per_page": 2})

        body = response.json()
        assert [task["title"] for task in body["data"]] == ["C", "D"]
        assert body["from"] == 3
        assert body["to"] == 4
        assert body["current_page"] == 2
        assert body["last_page"] == 3

    async def test_searches_titles(self, admin_client, project, make_tasks):
        await make_tasks(project, "Write copy", "Design logo", "Review copy")

        response = await admin_client.get(tasks_url(project), params={"q": "copy"})

        assert [task["title"] for task in response.json()["data"]] == ["Write copy", "Review copy"]

    async def test_search_underscore_is_literal(self, admin_client, project, make_tasks):
        await make_tasks(project, "fix_login", "fix login")

        response = await admin_client.get(tasks_url(project), params={"q": "fix_"})

        assert [task["title"] for task in response.json()["data"]] == ["fix_login"]

    async def test_filters_by_status(self, admin_client, project, make_tasks, make_status):
        task_status = await make_status()
        await make_tasks(project, "Untracked")
        await make_tasks(project, "Tracked", status=task_status)

        response = await admin_client.get(
            tasks_url(project), params={"status": str(task_status.id)}
        )

        assert [task["title"] for task in response.json()["data"]] == ["Tracked"]

    async def test_empty_project(self, admin_client, project):
        response = await admin_client.get(tasks_url(project))

        body = response.json()
        assert body["data"] == []
        assert body["from"] == 0
        assert body["last_page"] == 1

    async def test_unknown_project(self, admin_client):
        response = await admin_client.get(f"/api/v1/projects/{uuid.uuid4()}/tasks")

        assert response.status_code == 404

    async def test_viewer_can_list(self, viewer, make_client, project, make_tasks):
        await make_tasks(project, "A")

        async with make_client(viewer) as client:
            response = await client.get(tasks_url(project))

        assert response.status_code == 200

    async def test_requires_task_view(self, make_user, make_client, project):
        outsider = await make_user("outsider@example.com")

        async with make_client(outsider) as client:
            response = await client.get(tasks_url(project))

        assert response.status_code == 403
