"""Test helper functions for common API flows."""

from dataclasses import dataclass, field
from uuid import UUID

from httpx import AsyncClient

from tests.factories import short_id

ADMIN_PASSWORD = "password123"


@dataclass
class Actor:
    """A logged-in caller: ids from the login response plus ready-made headers."""

    user_id: UUID
    tenant_id: UUID | None
    email: str
    token: str
    subdomain: str | None = None
    headers: dict[str, str] = field(init=False)

    def __post_init__(self) -> None:
        self.headers = auth_headers(self.token)


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register_tenant(
    client: AsyncClient,
    subdomain: str | None = None,
    tenant_name: str = "Test Tenant",
    admin_email: str | None = None,
    admin_password: str = ADMIN_PASSWORD,
    admin_full_name: str = "Tenant Admin",
) -> dict:
    """Register a tenant through the API and return the response data."""
    subdomain = subdomain or f"t-{short_id()}"
    response = await client.post(
        "/api/auth/register-tenant",
        json={
            "tenantName": tenant_name,
            "subdomain": subdomain,
            "adminEmail": admin_email or f"admin@{subdomain}.example.com",
            "adminPassword": admin_password,
            "adminFullName": admin_full_name,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def login(
    client: AsyncClient,
    email: str,
    password: str = ADMIN_PASSWORD,
    tenant_subdomain: str | None = None,
) -> Actor:
    """Log in and return the caller, failing the test on anything but 200."""
    body: dict = {"email": email, "password": password}
    if tenant_subdomain is not None:
        body["tenantSubdomain"] = tenant_subdomain
    response = await client.post("/api/auth/login", json=body)
    assert response.status_code == 200, response.text
    data = response.json()["data"]
    tenant_id = data["user"]["tenantId"]
    return Actor(
        user_id=UUID(data["user"]["id"]),
        tenant_id=UUID(tenant_id) if tenant_id else None,
        email=email,
        token=data["token"],
        subdomain=tenant_subdomain,
    )


async def register_and_login(client: AsyncClient, **kwargs) -> Actor:
    """Register a fresh tenant and log in as its tenant_admin."""
    data = await register_tenant(client, **kwargs)
    return await login(
        client,
        data["adminUser"]["email"],
        kwargs.get("admin_password", ADMIN_PASSWORD),
        tenant_subdomain=data["subdomain"],
    )


async def create_member(
    client: AsyncClient,
    admin: Actor,
    role: str = "user",
    full_name: str = "Team Member",
    email: str | None = None,
    password: str = ADMIN_PASSWORD,
) -> Actor:
    """Create a user in the admin's tenant and log in as them."""
    email = email or f"member_{short_id()}@example.com"
    response = await client.post(
        f"/api/tenants/{admin.tenant_id}/users",
        json={"email": email, "password": password, "fullName": full_name, "role": role},
        headers=admin.headers,
    )
    assert response.status_code == 201, response.text
    return await login(client, email, password, tenant_subdomain=admin.subdomain)


async def create_project(client: AsyncClient, actor: Actor, name: str | None = None) -> dict:
    response = await client.post(
        "/api/projects",
        json={"name": name or f"Project {short_id()}"},
        headers=actor.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_task(client: AsyncClient, actor: Actor, project_id: str, **fields) -> dict:
    body = {"title": f"Task {short_id()}", **fields}
    response = await client.post(
        f"/api/projects/{project_id}/tasks", json=body, headers=actor.headers
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]
