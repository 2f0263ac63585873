"""Integration tests for user management inside a tenant."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.helpers import create_member, create_project, create_task

pytestmark = pytest.mark.integration


def _user_body(email: str, role: str = "user") -> dict:
    return {"email": email, "password": "password123", "fullName": "New Person", "role": role}


class TestCreateUser:
    async def test_admin_creates_user(self, client: AsyncClient, tenant_admin):
        response = await client.post(
            f"/api/tenants/{tenant_admin.tenant_id}/users",
            json=_user_body("New@Example.com"),
            headers=tenant_admin.headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["data"]["email"] == "new@example.com"
        assert body["data"]["role"] == "user"
        assert body["data"]["tenantId"] == str(tenant_admin.tenant_id)
        assert "hashedPassword" not in body["data"]

    async def test_user_limit_enforced(self, client: AsyncClient, tenant_admin):
        # Free plan: 5 users, the admin is the first
        for i in range(4):
            response = await client.post(
                f"/api/tenants/{tenant_admin.tenant_id}/users",
                json=_user_body(f"u{i}@example.com"),
                headers=tenant_admin.headers,
            )
            assert response.status_code == 201

        response = await client.post(
            f"/api/tenants/{tenant_admin.tenant_id}/users",
            json=_user_body("one-too-many@example.com"),
            headers=tenant_admin.headers,
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Subscription limit reached"

    async def test_inactive_users_do_not_count(self, client: AsyncClient, tenant_admin):
        members = [await create_member(client, tenant_admin) for _ in range(4)]
        await client.put(
            f"/api/users/{members[0].user_id}",
            json={"isActive": False},
            headers=tenant_admin.headers,
        )

        response = await client.post(
            f"/api/tenants/{tenant_admin.tenant_id}/users",
            json=_user_body("replacement@example.com"),
            headers=tenant_admin.headers,
        )

        assert response.status_code == 201

    async def test_reactivation_past_limit_rejected(self, client: AsyncClient, tenant_admin):
        members = [await create_member(client, tenant_admin) for _ in range(4)]
        await client.put(
            f"/api/users/{members[0].user_id}",
            json={"isActive": False},
            headers=tenant_admin.headers,
        )
        await client.post(
            f"/api/tenants/{tenant_admin.tenant_id}/users",
            json=_user_body("replacement@example.com"),
            headers=tenant_admin.headers,
        )

        response = await client.put(
            f"/api/users/{members[0].user_id}",
            json={"isActive": True},
            headers=tenant_admin.headers,
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Subscription limit reached"

    async def test_reactivation_under_limit_allowed(self, client: AsyncClient, tenant_admin):
        member = await create_member(client, tenant_admin)
        await client.put(
            f"/api/users/{member.user_id}", json={"isActive": False}, headers=tenant_admin.headers
        )

        response = await client.put(
            f"/api/users/{member.user_id}", json={"isActive": True}, headers=tenant_admin.headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["isActive"] is True

    async def test_duplicate_email_conflicts(self, client: AsyncClient, tenant_admin):
        url = f"/api/tenants/{tenant_admin.tenant_id}/users"
        await client.post(url, json=_user_body("dup@example.com"), headers=tenant_admin.headers)

        response = await client.post(
            url, json=_user_body("DUP@example.com"), headers=tenant_admin.headers
        )

        assert response.status_code == 409

    async def test_regular_user_cannot_create(self, client: AsyncClient, tenant_admin):
        member = await create_member(client, tenant_admin)

        response = await client.post(
            f"/api/tenants/{tenant_admin.tenant_id}/users",
            json=_user_body("x@example.com"),
            headers=member.headers,
        )

        assert response.status_code == 403

    async def test_cannot_create_in_other_tenant(
        self, client: AsyncClient, tenant_admin, other_tenant_admin
    ):
        response = await client.post(
            f"/api/tenants/{other_tenant_admin.tenant_id}/users",
            json=_user_body("x@example.com"),
            headers=tenant_admin.headers,
        )

        assert response.status_code == 403

    async def test_super_admin_role_not_assignable(self, client: AsyncClient, tenant_admin):
        response = await client.post(
            f"/api/tenants/{tenant_admin.tenant_id}/users",
            json=_user_body("x@example.com", role="super_admin"),
            headers=tenant_admin.headers,
        )

        assert response.status_code == 400


class TestListUsers:
    async def test_lists_members(self, client: AsyncClient, tenant_admin):
        await create_member(client, tenant_admin, full_name="Carol Danvers")
        await create_member(client, tenant_admin, full_name="Bruce Banner")

        response = await client.get(
            f"/api/tenants/{tenant_admin.tenant_id}/users", headers=tenant_admin.headers
        )

        data = response.json()["data"]
        assert data["total"] == 3
        assert data["pagination"]["limit"] == 50

    async def test_search_by_name(self, client: AsyncClient, tenant_admin):
        await create_member(client, tenant_admin, full_name="Carol Danvers")
        await create_member(client, tenant_admin, full_name="Bruce Banner")

        response = await client.get(
            f"/api/tenants/{tenant_admin.tenant_id}/users",
            params={"search": "carol"},
            headers=tenant_admin.headers,
        )

        users = response.json()["data"]["users"]
        assert [u["fullName"] for u in users] == ["Carol Danvers"]

    async def test_filter_by_role(self, client: AsyncClient, tenant_admin):
        await create_member(client, tenant_admin)

        response = await client.get(
            f"/api/tenants/{tenant_admin.tenant_id}/users",
            params={"role": "tenant_admin"},
            headers=tenant_admin.headers,
        )

        users = response.json()["data"]["users"]
        assert [u["id"] for u in users] == [str(tenant_admin.user_id)]

    async def test_members_of_other_tenant_hidden(
        self, client: AsyncClient, tenant_admin, other_tenant_admin
    ):
        response = await client.get(
            f"/api/tenants/{other_tenant_admin.tenant_id}/users", headers=tenant_admin.headers
        )

        assert response.status_code == 403


class TestUpdateUser:
    async def test_user_updates_own_name(self, client: AsyncClient, tenant_admin):
        member = await create_member(client, tenant_admin)

        response = await client.put(
            f"/api/users/{member.user_id}", json={"fullName": "Renamed"}, headers=member.headers
        )

        assert response.status_code == 200
        assert response.json()["message"] == "User updated successfully"
        assert response.json()["data"]["fullName"] == "Renamed"

    async def test_user_cannot_promote_self(self, client: AsyncClient, tenant_admin):
        member = await create_member(client, tenant_admin)

        response = await client.put(
            f"/api/users/{member.user_id}", json={"role": "tenant_admin"}, headers=member.headers
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Cannot update restricted fields"

    async def test_user_cannot_edit_others(self, client: AsyncClient, tenant_admin):
        member = await create_member(client, tenant_admin)

        response = await client.put(
            f"/api/users/{tenant_admin.user_id}", json={"fullName": "X"}, headers=member.headers
        )

        assert response.status_code == 403

    async def test_admin_changes_role(self, client: AsyncClient, tenant_admin):
        member = await create_member(client, tenant_admin)

        response = await client.put(
            f"/api/users/{member.user_id}",
            json={"role": "tenant_admin", "isActive": False},
            headers=tenant_admin.headers,
        )

        data = response.json()["data"]
        assert data["role"] == "tenant_admin"
        assert data["isActive"] is False

    async def test_admin_of_other_tenant_forbidden(
        self, client: AsyncClient, tenant_admin, other_tenant_admin
    ):
        response = await client.put(
            f"/api/users/{tenant_admin.user_id}",
            json={"fullName": "X"},
            headers=other_tenant_admin.headers,
        )

        assert response.status_code == 403

    async def test_missing_user_is_404(self, client: AsyncClient, tenant_admin):
        response = await client.put(
            f"/api/users/{uuid4()}", json={"fullName": "X"}, headers=tenant_admin.headers
        )

        assert response.status_code == 404

    async def test_empty_update_is_400(self, client: AsyncClient, tenant_admin):
        response = await client.put(
            f"/api/users/{tenant_admin.user_id}", json={}, headers=tenant_admin.headers
        )

        assert response.status_code == 400


class TestDeleteUser:
    async def test_delete_clears_assignments(self, client: AsyncClient, tenant_admin):
        member = await create_member(client, tenant_admin)
        project = await create_project(client, member)
        task = await create_task(
            client, tenant_admin, project["id"], assignedTo=str(member.user_id)
        )

        response = await client.delete(f"/api/users/{member.user_id}", headers=tenant_admin.headers)

        assert response.status_code == 200
        assert response.json()["message"] == "User deleted successfully"

        tasks = await client.get(
            f"/api/projects/{project['id']}/tasks", headers=tenant_admin.headers
        )
        listed = {t["id"]: t for t in tasks.json()["data"]["tasks"]}
        assert listed[task["id"]]["assignedTo"] is None

        detail = await client.get(f"/api/projects/{project['id']}", headers=tenant_admin.headers)
        assert detail.json()["data"]["createdBy"] == {"id": None, "fullName": None}

    async def test_cannot_delete_self(self, client: AsyncClient, tenant_admin):
        response = await client.delete(
            f"/api/users/{tenant_admin.user_id}", headers=tenant_admin.headers
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Cannot delete yourself"

    async def test_regular_user_cannot_delete(self, client: AsyncClient, tenant_admin):
        member = await create_member(client, tenant_admin)
        other = await create_member(client, tenant_admin)

        response = await client.delete(f"/api/users/{other.user_id}", headers=member.headers)

        assert response.status_code == 403

    async def test_cannot_delete_other_tenant_user(
        self, client: AsyncClient, tenant_admin, other_tenant_admin
    ):
        response = await client.delete(
            f"/api/users/{other_tenant_admin.user_id}", headers=tenant_admin.headers
        )

        assert response.status_code == 403

    async def test_missing_user_is_404(self, client: AsyncClient, tenant_admin):
        response = await client.delete(f"/api/users/{uuid4()}", headers=tenant_admin.headers)

        assert response.status_code == 404
