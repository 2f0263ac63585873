"""Tenant model - the isolation boundary for users, projects and tasks."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskhub.models.base import utc_now
from src.taskhub.models.enums import PLAN_LIMITS, SubscriptionPlan, TenantStatus

MAX_SUBDOMAIN_LENGTH = 63


class Tenant(SQLModel, table=True):
    """Tenant registry.

    max_users and max_projects start from the plan table (see limits_for_plan)
    and are recomputed whenever subscription_plan changes.
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    subdomain: str = Field(max_length=MAX_SUBDOMAIN_LENGTH, unique=True, index=True)
    status: str = Field(default=TenantStatus.ACTIVE.value, max_length=20)
    subscription_plan: str = Field(default=SubscriptionPlan.FREE.value, max_length=20)
    max_users: int = Field(default=PLAN_LIMITS[SubscriptionPlan.FREE].max_users)
    max_projects: int = Field(default=PLAN_LIMITS[SubscriptionPlan.FREE].max_projects)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_suspended(self) -> bool:
        return self.status == TenantStatus.SUSPENDED.value
