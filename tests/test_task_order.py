"""Tests for persisting the order of a project's tasks."""

import uuid

import pytest

from taskdesk.models import PermissionKey


def order_url(project) -> str:
    return f"/api/v1/projects/{project.id}/tasks/order"


@pytest.fixture
async def project(make_project):
    return await make_project()


@pytest.fixture
async def tasks(project, make_tasks):
    return await make_tasks(project, "A", "B", "C")


class TestReorderSucceeds:

    async def test_moving_last_task_first(self, admin_client, project, tasks, task_orders):
        a, b, c = tasks

        response = await admin_client.patch(
            order_url(project), json={"task_ids": [str(c.id), str(a.id), str(b.id)]}
        )

        assert response.status_code == 200
        assert await task_orders(project) == {"C": 0, "A": 1, "B": 2}

    async def test_listing_returns_submitted_order(self, admin_client, project, tasks):
        a, b, c = tasks
        submitted = [str(b.id), str(c.id), str(a.id)]

        await admin_client.patch(order_url(project), json={"task_ids": submitted})
        response = await admin_client.get(f"/api/v1/projects/{project.id}/tasks")

        data = response.json()["data"]
        assert [task["id"] for task in data] == submitted
        assert [task["order"] for task in data] == [0, 1, 2]

    async def test_bumps_order_version(self, admin_client, project, tasks, order_version):
        a, b, c = tasks

        response = await admin_client.patch(
            order_url(project), json={"task_ids": [str(c.id), str(b.id), str(a.id)]}
        )

        assert response.json() == {"success": True, "order_version": 1}
        assert await order_version(project) == 1

    async def test_resubmitting_same_order_is_idempotent(
        self, admin_client, project, tasks, task_orders, order_version
    ):
        a, b, c = tasks
        payload = {"task_ids": [str(b.id), str(a.id), str(c.id)]}

        first = await admin_client.patch(order_url(project), json=payload)
        second = await admin_client.patch(order_url(project), json=payload)

        assert first.status_code == second.status_code == 200
        assert await task_orders(project) == {"B": 0, "A": 1, "C": 2}
        assert second.json()["order_version"] == first.json()["order_version"]
        assert await order_version(project) == 1

    async def test_matching_expected_version_is_accepted(self, admin_client, project, tasks):
        a, b, c = tasks

        response = await admin_client.patch(
            order_url(project),
            json={"task_ids": [str(c.id), str(b.id), str(a.id)], "expected_version": 0},
        )

        assert response.status_code == 200
        assert response.json()["order_version"] == 1

    async def test_empty_project_accepts_empty_order(self, admin_client, make_project):
        empty = await make_project(name_en="Empty")

        response = await admin_client.patch(order_url(empty), json={"task_ids": []})

        assert response.status_code == 200
        assert response.json()["order_version"] == 0

    async def test_reorder_route_with_project_in_body(
        self, admin_client, project, tasks, task_orders
    ):
        a, b, c = tasks

        response = await admin_client.patch(
            "/api/v1/tasks/reorder",
            json={"project_id": str(project.id), "task_ids": [str(c.id), str(a.id), str(b.id)]},
        )

        assert response.status_code == 200
        assert await task_orders(project) == {"C": 0, "A": 1, "B": 2}


class TestReorderRejected:

    async def test_foreign_task_id_leaves_order_unchanged(
        self, admin_client, project, tasks, make_project, make_tasks, task_orders
    ):
        other = await make_project(name_en="Other")
        (foreign,) = await make_tasks(other, "X")
        a, b, _ = tasks

        response = await admin_client.patch(
            order_url(project), json={"task_ids": [str(foreign.id), str(a.id), str(b.id)]}
        )

        assert response.status_code == 400
        assert "not found in this project" in response.json()["detail"]
        assert await task_orders(project) == {"A": 0, "B": 1, "C": 2}
        assert await task_orders(other) == {"X": 0}

    async def test_duplicate_ids(self, admin_client, project, tasks, task_orders):
        a, b, c = tasks

        response = await admin_client.patch(
            order_url(project), json={"task_ids": [str(c.id), str(c.id), str(a.id)]}
        )

        assert response.status_code == 400
        assert "duplicate" in response.json()["detail"]
        assert await task_orders(project) == {"A": 0, "B": 1, "C": 2}

    async def test_partial_list(self, admin_client, project, tasks, task_orders):
        a, b, _ = tasks

        response = await admin_client.patch(
            order_url(project), json={"task_ids": [str(b.id), str(a.id)]}
        )

        assert response.status_code == 400
        assert await task_orders(project) == {"A": 0, "B": 1, "C": 2}

    async def test_stale_expected_version(
        self, admin_client, project, tasks, task_orders, order_version
    ):
        a, b, c = tasks
        await admin_client.patch(
            order_url(project), json={"task_ids": [str(b.id), str(a.id), str(c.id)]}
        )

        response = await admin_client.patch(
            order_url(project),
            json={"task_ids": [str(c.id), str(b.id), str(a.id)], "expected_version": 0},
        )

        assert response.status_code == 409
        assert await task_orders(project) == {"B": 0, "A": 1, "C": 2}
        assert await order_version(project) == 1

    async def test_unknown_project(self, admin_client, tasks):
        a, b, c = tasks

        response = await admin_client.patch(
            f"/api/v1/projects/{uuid.uuid4()}/tasks/order",
            json={"task_ids": [str(a.id), str(b.id), str(c.id)]},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Project not found"

    async def test_malformed_id(self, admin_client, project, tasks):
        response = await admin_client.patch(
            order_url(project), json={"task_ids": ["not-a-uuid"]}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Validation failed"
        assert body["errors"]

    async def test_negative_expected_version(self, admin_client, project, tasks):
        a, b, c = tasks

        response = await admin_client.patch(
            order_url(project),
            json={"task_ids": [str(a.id), str(b.id), str(c.id)], "expected_version": -1},
        )

        assert response.status_code == 400


class TestReorderPermissions:

    async def test_requires_authentication(self, anonymous_client, project, tasks):
        response = await anonymous_client.patch(
            order_url(project), json={"task_ids": [str(t.id) for t in tasks]}
        )

        assert response.status_code == 401

    async def test_requires_task_update_permission(
        self, viewer, make_client, project, tasks, task_orders
    ):
        a, b, c = tasks

        async with make_client(viewer) as client:
            response = await client.patch(
                order_url(project), json={"task_ids": [str(c.id), str(b.id), str(a.id)]}
            )

        assert response.status_code == 403
        assert response.json()["detail"] == "Missing permission: task_update"
        assert await task_orders(project) == {"A": 0, "B": 1, "C": 2}

    async def test_staff_with_task_update_permission(
        self, make_user, make_client, project, tasks, task_orders
    ):
        editor = await make_user("editor@example.com", permissions=(PermissionKey.TASK_UPDATE,))
        a, b, c = tasks

        async with make_client(editor) as client:
            response = await client.patch(
                order_url(project), json={"task_ids": [str(c.id), str(b.id), str(a.id)]}
            )

        assert response.status_code == 200
        assert await task_orders(project) == {"C": 0, "B": 1, "A": 2}
