"""Repository for Tenant entity."""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.taskhub.models import Project, Task, Tenant, User
from src.taskhub.repositories.base import BaseRepository


def _count_for_tenant(model: Any) -> Any:
    """Correlated COUNT(*) of ``model`` rows owned by the outer Tenant row."""
    return (
        select(func.count())
        .select_from(model)
        .where(model.tenant_id == Tenant.id)
        .correlate(Tenant)
        .scalar_subquery()
    )


class TenantRepository(BaseRepository[Tenant]):
    model = Tenant

    async def get_by_subdomain(self, subdomain: str) -> Tenant | None:
        result = await self.session.execute(select(Tenant).where(Tenant.subdomain == subdomain))
        return result.scalar_one_or_none()

    async def exists_by_subdomain(self, subdomain: str) -> bool:
        return await self.get_by_subdomain(subdomain) is not None

    async def get_stats(self, tenant_id: UUID) -> tuple[int, int, int]:
        """Return (total_users, total_projects, total_tasks) for a tenant."""
        query = select(
            *(
                select(func.count()).select_from(model).where(model.tenant_id == tenant_id)
                .scalar_subquery()
                for model in (User, Project, Task)
            )
        )
        users, projects, tasks = (await self.session.execute(query)).one()
        return int(users), int(projects), int(tasks)

    async def list_paginated(
        self,
        page: int,
        limit: int,
        status: str | None = None,
        subscription_plan: str | None = None,
    ) -> tuple[Sequence[Any], int]:
        """List tenants newest first, each row as (Tenant, total_users, total_projects)."""
        query = select(
            Tenant,
            _count_for_tenant(User).label("total_users"),
            _count_for_tenant(Project).label("total_projects"),
        )
        if status:
            query = query.where(Tenant.status == status)
        if subscription_plan:
            query = query.where(Tenant.subscription_plan == subscription_plan)
        return await self.paginate(query, page, limit, [Tenant.created_at.desc()])  # type: ignore[attr-defined]
