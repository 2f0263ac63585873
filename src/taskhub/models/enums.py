"""Shared enums for models."""

from enum import Enum
from typing import NamedTuple


class TenantStatus(str, Enum):
    """Tenant lifecycle status. Only super admins change it."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    TRIAL = "trial"


class SubscriptionPlan(str, Enum):
    FREE = "free"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    TENANT_ADMIN = "tenant_admin"
    USER = "user"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"
    COMPLETED = "completed"


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PlanLimits(NamedTuple):
    max_users: int
    max_projects: int


PLAN_LIMITS: dict[SubscriptionPlan, PlanLimits] = {
    SubscriptionPlan.FREE: PlanLimits(max_users=5, max_projects=3),
    SubscriptionPlan.PRO: PlanLimits(max_users=25, max_projects=15),
    SubscriptionPlan.ENTERPRISE: PlanLimits(max_users=100, max_projects=50),
}


def limits_for_plan(plan: SubscriptionPlan | str) -> PlanLimits:
    return PLAN_LIMITS[SubscriptionPlan(plan)]
