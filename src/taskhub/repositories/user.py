"""Repository for User entity."""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import or_
from sqlmodel import select

from src.taskhub.models import Tenant, User, UserRole
from src.taskhub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email_in_tenant(self, tenant_id: UUID, email: str) -> User | None:
        result = await self.session.execute(
            select(User).where(User.tenant_id == tenant_id, User.email == email)
        )
        return result.scalar_one_or_none()

    async def exists_by_email_in_tenant(self, tenant_id: UUID, email: str) -> bool:
        return await self.get_by_email_in_tenant(tenant_id, email) is not None

    async def get_super_admin_by_email(self, email: str) -> User | None:
        result = await self.session.execute(
            select(User).where(
                User.email == email,
                User.role == UserRole.SUPER_ADMIN.value,
                User.tenant_id.is_(None),  # type: ignore[union-attr]
            )
        )
        return result.scalars().first()

    async def get_with_tenant(self, user_id: UUID) -> tuple[User, Tenant | None] | None:
        """Fetch a user together with their tenant (None for super admins)."""
        result = await self.session.execute(
            select(User, Tenant)
            .outerjoin(Tenant, User.tenant_id == Tenant.id)  # type: ignore[arg-type]
            .where(User.id == user_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], row[1]

    async def count_active_in_tenant(self, tenant_id: UUID) -> int:
        return await self.count(User.tenant_id == tenant_id, User.is_active == True)  # noqa: E712

    async def exists_in_tenant(self, user_id: UUID, tenant_id: UUID) -> bool:
        return await self.count(User.id == user_id, User.tenant_id == tenant_id) > 0

    async def list_by_tenant(
        self,
        tenant_id: UUID,
        page: int,
        limit: int,
        search: str | None = None,
        role: str | None = None,
    ) -> tuple[Sequence[Any], int]:
        """List tenant users newest first. Search matches full name or email."""
        query = select(User).where(User.tenant_id == tenant_id)
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(User.full_name.ilike(pattern), User.email.ilike(pattern))  # type: ignore[attr-defined]
            )
        if role:
            query = query.where(User.role == role)
        return await self.paginate(query, page, limit, [User.created_at.desc()])  # type: ignore[attr-defined]
