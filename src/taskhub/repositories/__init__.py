"""Repository layer - data access abstraction."""

from src.taskhub.repositories.audit import AuditLogRepository
from src.taskhub.repositories.base import MAX_PAGE_SIZE, BaseRepository, clamp_pagination
from src.taskhub.repositories.project import ProjectRepository
from src.taskhub.repositories.task import TaskRepository
from src.taskhub.repositories.tenant import TenantRepository
from src.taskhub.repositories.user import UserRepository

__all__ = [
    "MAX_PAGE_SIZE",
    "clamp_pagination",
    # Base
    "BaseRepository",
    # Entities
    "AuditLogRepository",
    "ProjectRepository",
    "TaskRepository",
    "TenantRepository",
    "UserRepository",
]
