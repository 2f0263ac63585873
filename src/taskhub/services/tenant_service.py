"""Tenant service - details with usage stats, updates and the global listing."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskhub.core.exceptions import BadRequestError, NotFoundError
from src.taskhub.core.logging import get_logger
from src.taskhub.models import AuditAction, limits_for_plan
from src.taskhub.repositories import TenantRepository, clamp_pagination
from src.taskhub.schemas.common import change_set
from src.taskhub.schemas.tenant import (
    RESTRICTED_TENANT_FIELDS,
    TenantDetail,
    TenantList,
    TenantListItem,
    TenantPagination,
    TenantStats,
    TenantUpdate,
    TenantUpdateResult,
)
from src.taskhub.services import authorization
from src.taskhub.services.audit_service import AuditService
from src.taskhub.services.authorization import Principal

logger = get_logger(__name__)

DEFAULT_TENANT_PAGE_SIZE = 10


class TenantService:
    """Tenant management - business logic only."""

    def __init__(
        self,
        tenant_repo: TenantRepository,
        audit_service: AuditService,
        session: AsyncSession,
    ):
        self.tenant_repo = tenant_repo
        self.audit_service = audit_service
        self.session = session

    async def get_tenant(self, principal: Principal, tenant_id: UUID) -> TenantDetail:
        authorization.require_tenant_read(principal, tenant_id)

        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")

        total_users, total_projects, total_tasks = await self.tenant_repo.get_stats(tenant_id)
        return TenantDetail(
            id=tenant.id,
            name=tenant.name,
            subdomain=tenant.subdomain,
            status=tenant.status,
            subscription_plan=tenant.subscription_plan,
            max_users=tenant.max_users,
            max_projects=tenant.max_projects,
            created_at=tenant.created_at,
            stats=TenantStats(
                total_users=total_users,
                total_projects=total_projects,
                total_tasks=total_tasks,
            ),
        )

    async def update_tenant(
        self, principal: Principal, tenant_id: UUID, data: TenantUpdate
    ) -> TenantUpdateResult:
        """Apply a partial update.

        Restricted fields are rejected (not ignored) for tenant admins. A plan
        change recomputes both quotas unless the request sets them explicitly.
        """
        changes = change_set(data)
        authorization.require_tenant_update(
            principal, tenant_id, changes.keys(), RESTRICTED_TENANT_FIELDS
        )
        if not changes:
            raise BadRequestError("No valid fields to update")

        try:
            tenant = await self.tenant_repo.get_by_id(tenant_id, for_update=True)
            if tenant is None:
                raise NotFoundError("Tenant not found")

            if "subscription_plan" in changes:
                limits = limits_for_plan(changes["subscription_plan"])
                changes.setdefault("max_users", limits.max_users)
                changes.setdefault("max_projects", limits.max_projects)

            updated = await self.tenant_repo.apply_update(tenant_id, changes)
            if updated is None:
                raise NotFoundError("Tenant not found")

            await self.audit_service.log_action(
                tenant_id=tenant_id,
                action=AuditAction.UPDATE_TENANT,
                entity_type="tenant",
                entity_id=tenant_id,
                user_id=principal.user_id,
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Tenant updated", tenant_id=str(tenant_id), fields=sorted(changes))
        return TenantUpdateResult.model_validate(updated)

    async def list_tenants(
        self,
        principal: Principal,
        page: int = 1,
        limit: int = DEFAULT_TENANT_PAGE_SIZE,
        status: str | None = None,
        subscription_plan: str | None = None,
    ) -> TenantList:
        authorization.require_super_admin(principal)
        page, limit = clamp_pagination(page, limit)

        rows, total = await self.tenant_repo.list_paginated(
            page=page, limit=limit, status=status, subscription_plan=subscription_plan
        )
        tenants = [
            TenantListItem(
                id=tenant.id,
                name=tenant.name,
                subdomain=tenant.subdomain,
                status=tenant.status,
                subscription_plan=tenant.subscription_plan,
                total_users=total_users,
                total_projects=total_projects,
                created_at=tenant.created_at,
            )
            for tenant, total_users, total_projects in rows
        ]
        return TenantList(
            tenants=tenants,
            pagination=TenantPagination.build(page, limit, total, total_tenants=total),
        )
