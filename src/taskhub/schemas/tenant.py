from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.taskhub.models import SubscriptionPlan, TenantStatus
from src.taskhub.schemas.common import CamelModel, Pagination, reject_null

# Fields only a super admin may send
RESTRICTED_TENANT_FIELDS = frozenset({"status", "subscription_plan", "max_users", "max_projects"})


class TenantStats(CamelModel):
    total_users: int
    total_projects: int
    total_tasks: int


class TenantDetail(CamelModel):
    id: UUID
    name: str
    subdomain: str
    status: str
    subscription_plan: str
    max_users: int
    max_projects: int
    created_at: datetime
    stats: TenantStats


class TenantUpdate(CamelModel):
    """Partial update. Only the fields present in the request body count."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    status: TenantStatus | None = None
    subscription_plan: SubscriptionPlan | None = None
    max_users: int | None = Field(default=None, ge=1)
    max_projects: int | None = Field(default=None, ge=1)

    _not_null = field_validator(
        "name", "status", "subscription_plan", "max_users", "max_projects"
    )(reject_null)


class TenantUpdateResult(CamelModel):
    id: UUID
    name: str
    status: str
    subscription_plan: str
    max_users: int
    max_projects: int
    updated_at: datetime


class TenantListItem(CamelModel):
    id: UUID
    name: str
    subdomain: str
    status: str
    subscription_plan: str
    total_users: int
    total_projects: int
    created_at: datetime


class TenantPagination(Pagination):
    total_tenants: int


class TenantList(CamelModel):
    tenants: list[TenantListItem]
    pagination: TenantPagination
