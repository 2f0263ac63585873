"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.taskhub.api.dependencies.db import DBSession
from src.taskhub.repositories import (
    AuditLogRepository,
    ProjectRepository,
    TaskRepository,
    TenantRepository,
    UserRepository,
)


def get_tenant_repository(session: DBSession) -> TenantRepository:
    return TenantRepository(session)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


def get_audit_log_repository(session: DBSession) -> AuditLogRepository:
    return AuditLogRepository(session)


TenantRepo = Annotated[TenantRepository, Depends(get_tenant_repository)]
UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
AuditLogRepo = Annotated[AuditLogRepository, Depends(get_audit_log_repository)]
