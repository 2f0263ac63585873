"""Tenant-scoped authorization policy.

Pure functions over a Principal and the target's identifiers. Each one either
returns silently or raises the ServiceError the caller should surface. They
never touch the database, so services fetch the target first and pass in
what the policy needs.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from src.taskhub.core.exceptions import NotFoundError, PermissionDeniedError
from src.taskhub.models import UserRole

UNAUTHORIZED_ACCESS = "Unauthorized access"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, as asserted by the access token."""

    user_id: UUID
    tenant_id: UUID | None
    role: UserRole

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    @property
    def is_tenant_admin(self) -> bool:
        return self.role == UserRole.TENANT_ADMIN

    def belongs_to(self, tenant_id: UUID | None) -> bool:
        return self.tenant_id is not None and self.tenant_id == tenant_id


def require_tenant_read(principal: Principal, tenant_id: UUID) -> None:
    if principal.is_super_admin or principal.belongs_to(tenant_id):
        return
    raise PermissionDeniedError(UNAUTHORIZED_ACCESS)


def require_tenant_update(
    principal: Principal,
    tenant_id: UUID,
    fields: Iterable[str],
    restricted: frozenset[str],
) -> None:
    """Super admins may change anything; tenant admins only unrestricted fields."""
    if principal.is_super_admin:
        return
    if not principal.is_tenant_admin:
        raise PermissionDeniedError()
    if not principal.belongs_to(tenant_id):
        raise PermissionDeniedError(UNAUTHORIZED_ACCESS)
    if restricted.intersection(fields):
        raise PermissionDeniedError("Cannot update restricted fields")


def require_super_admin(principal: Principal) -> None:
    if not principal.is_super_admin:
        raise PermissionDeniedError()


def require_tenant_admin_of(principal: Principal, tenant_id: UUID | None) -> None:
    """Tenant admin acting inside their own tenant."""
    if not principal.is_tenant_admin or not principal.belongs_to(tenant_id):
        raise PermissionDeniedError(UNAUTHORIZED_ACCESS)


def require_tenant_member(principal: Principal, tenant_id: UUID) -> None:
    if not principal.belongs_to(tenant_id):
        raise PermissionDeniedError(UNAUTHORIZED_ACCESS)


def require_user_delete(principal: Principal, target_id: UUID) -> None:
    """Checked before the target is loaded; tenant membership is checked after."""
    if not principal.is_tenant_admin:
        raise PermissionDeniedError(UNAUTHORIZED_ACCESS)
    if principal.user_id == target_id:
        raise PermissionDeniedError("Cannot delete yourself")


def require_user_update(
    principal: Principal,
    target_id: UUID,
    target_tenant_id: UUID | None,
    fields: Iterable[str],
    restricted: frozenset[str],
) -> None:
    """Tenant admins edit anyone in their tenant; everyone else edits only their own name."""
    if principal.is_tenant_admin and principal.belongs_to(target_tenant_id):
        return
    if principal.user_id != target_id:
        raise PermissionDeniedError(UNAUTHORIZED_ACCESS)
    if restricted.intersection(fields):
        raise PermissionDeniedError("Cannot update restricted fields")


def require_project_visible(
    principal: Principal,
    project_tenant_id: UUID,
    message: str = "Project not found",
) -> None:
    """Projects of other tenants are reported as missing, not forbidden."""
    if not principal.belongs_to(project_tenant_id):
        raise NotFoundError(message)


def require_project_modify(principal: Principal, created_by: UUID | None) -> None:
    if principal.is_tenant_admin or (created_by is not None and principal.user_id == created_by):
        return
    raise PermissionDeniedError(UNAUTHORIZED_ACCESS)


def require_same_tenant(principal: Principal, resource_tenant_id: UUID, message: str) -> None:
    """Tasks (and projects reached through task routes) of other tenants are forbidden."""
    if not principal.belongs_to(resource_tenant_id):
        raise PermissionDeniedError(message)


def require_tenant_context(principal: Principal) -> UUID:
    """Tenant-scoped resources need a principal that belongs to a tenant."""
    if principal.tenant_id is None:
        raise PermissionDeniedError("Tenant context required")
    return principal.tenant_id
