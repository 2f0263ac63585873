"""Integration test fixtures for database and HTTP client operations.

Each test gets its own in-memory SQLite database. StaticPool keeps the
single connection alive for the test, so the schema created here is the one
the application sees. Uses polyfactory for rows the API cannot create.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.taskhub.core.db import Database
from src.taskhub.main import create_app
from src.taskhub.models import AuditLog, Project, Task, Tenant, User  # noqa: F401
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory
from tests.helpers import Actor, login, register_and_login

SUPER_ADMIN_EMAIL = "root@platform.example.com"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with every table created."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def database(engine: AsyncEngine) -> Database:
    return Database(engine)


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for direct database setup and assertions.

    Changes must be committed explicitly before the API can see them.
    """
    async with database.session() as session:
        yield session


@pytest.fixture
def app(database: Database) -> FastAPI:
    """Application wired to the test database.

    ASGITransport does not run the lifespan, so the Database handle is
    injected instead of created from settings.
    """
    return create_app(database=database)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client for testing API endpoints."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def tenant_admin(client: AsyncClient) -> Actor:
    """A freshly registered tenant, logged in as its tenant_admin."""
    return await register_and_login(client)


@pytest.fixture
async def other_tenant_admin(client: AsyncClient) -> Actor:
    """Admin of a second, unrelated tenant."""
    return await register_and_login(client)


@pytest.fixture
async def super_admin(client: AsyncClient, db_session: AsyncSession) -> Actor:
    """Platform super admin (no tenant), logged in without tenant context."""
    db_session.add(UserFactory.super_admin(email=SUPER_ADMIN_EMAIL))
    await db_session.commit()
    return await login(client, SUPER_ADMIN_EMAIL, DEFAULT_TEST_PASSWORD)
