"""FastAPI dependency injection definitions."""

from src.taskhub.api.dependencies.auth import CurrentPrincipal, get_principal
from src.taskhub.api.dependencies.db import (
    DatabaseDep,
    DBSession,
    get_database,
    get_db_session,
)
from src.taskhub.api.dependencies.repositories import (
    AuditLogRepo,
    ProjectRepo,
    TaskRepo,
    TenantRepo,
    UserRepo,
)
from src.taskhub.api.dependencies.services import (
    AuditServiceDep,
    AuthServiceDep,
    ProjectServiceDep,
    TaskServiceDep,
    TenantServiceDep,
    UserServiceDep,
)

__all__ = [
    # Database
    "DatabaseDep",
    "DBSession",
    "get_database",
    "get_db_session",
    # Auth
    "CurrentPrincipal",
    "get_principal",
    # Repositories
    "AuditLogRepo",
    "ProjectRepo",
    "TaskRepo",
    "TenantRepo",
    "UserRepo",
    # Services
    "AuditServiceDep",
    "AuthServiceDep",
    "ProjectServiceDep",
    "TaskServiceDep",
    "TenantServiceDep",
    "UserServiceDep",
]
