"""Service factory dependencies.

Every repository and service of a request shares the request's single session.
"""

from typing import Annotated

from fastapi import Depends

from src.taskhub.api.dependencies.db import DBSession
from src.taskhub.api.dependencies.repositories import (
    AuditLogRepo,
    ProjectRepo,
    TaskRepo,
    TenantRepo,
    UserRepo,
)
from src.taskhub.services.audit_service import AuditService
from src.taskhub.services.auth_service import AuthService
from src.taskhub.services.project_service import ProjectService
from src.taskhub.services.task_service import TaskService
from src.taskhub.services.tenant_service import TenantService
from src.taskhub.services.user_service import UserService


def get_audit_service(audit_repo: AuditLogRepo, session: DBSession) -> AuditService:
    return AuditService(audit_repo, session)


AuditServiceDep = Annotated[AuditService, Depends(get_audit_service)]


def get_auth_service(
    tenant_repo: TenantRepo,
    user_repo: UserRepo,
    audit_service: AuditServiceDep,
    session: DBSession,
) -> AuthService:
    return AuthService(tenant_repo, user_repo, audit_service, session)


def get_tenant_service(
    tenant_repo: TenantRepo,
    audit_service: AuditServiceDep,
    session: DBSession,
) -> TenantService:
    return TenantService(tenant_repo, audit_service, session)


def get_user_service(
    user_repo: UserRepo,
    tenant_repo: TenantRepo,
    project_repo: ProjectRepo,
    task_repo: TaskRepo,
    audit_service: AuditServiceDep,
    session: DBSession,
) -> UserService:
    return UserService(user_repo, tenant_repo, project_repo, task_repo, audit_service, session)


def get_project_service(
    project_repo: ProjectRepo,
    task_repo: TaskRepo,
    tenant_repo: TenantRepo,
    audit_service: AuditServiceDep,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, task_repo, tenant_repo, audit_service, session)


def get_task_service(
    task_repo: TaskRepo,
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    audit_service: AuditServiceDep,
    session: DBSession,
) -> TaskService:
    return TaskService(task_repo, project_repo, user_repo, audit_service, session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
