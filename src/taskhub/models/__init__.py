"""Model exports.

Import from here: `from src.taskhub.models import User, Tenant`
"""

from src.taskhub.models.audit import AuditAction, AuditLog
from src.taskhub.models.enums import (
    PLAN_LIMITS,
    PlanLimits,
    ProjectStatus,
    SubscriptionPlan,
    TaskPriority,
    TaskStatus,
    TenantStatus,
    UserRole,
    limits_for_plan,
)
from src.taskhub.models.project import Project
from src.taskhub.models.task import Task
from src.taskhub.models.tenant import Tenant
from src.taskhub.models.user import User

__all__ = [
    # Enums
    "AuditAction",
    "PLAN_LIMITS",
    "PlanLimits",
    "ProjectStatus",
    "SubscriptionPlan",
    "TaskPriority",
    "TaskStatus",
    "TenantStatus",
    "UserRole",
    "limits_for_plan",
    # Models
    "AuditLog",
    "Project",
    "Task",
    "Tenant",
    "User",
]
