"""Project service - tenant-scoped projects with task counters."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskhub.core.exceptions import BadRequestError, NotFoundError
from src.taskhub.core.logging import get_logger
from src.taskhub.models import AuditAction, Project
from src.taskhub.repositories import (
    ProjectRepository,
    TaskRepository,
    TenantRepository,
    clamp_pagination,
)
from src.taskhub.schemas.common import Pagination, change_set
from src.taskhub.schemas.project import (
    CreatorRef,
    ProjectCreate,
    ProjectList,
    ProjectRead,
    ProjectSummary,
    ProjectUpdate,
    ProjectUpdateResult,
)
from src.taskhub.services import authorization
from src.taskhub.services.audit_service import AuditService
from src.taskhub.services.authorization import Principal
from src.taskhub.services.quota import PROJECT_LIMIT_MESSAGE, enforce_quota

logger = get_logger(__name__)

DEFAULT_PROJECT_PAGE_SIZE = 20
PROJECT_NOT_VISIBLE = "Project not found or belongs to different tenant"


def _to_summary(row: Any) -> ProjectSummary:
    project, creator_name, task_count, completed_task_count = row
    return ProjectSummary(
        id=project.id,
        name=project.name,
        description=project.description,
        status=project.status,
        created_by=CreatorRef(id=project.created_by, full_name=creator_name),
        task_count=task_count,
        completed_task_count=completed_task_count,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


class ProjectService:
    """Project management - business logic only."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        tenant_repo: TenantRepository,
        audit_service: AuditService,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.task_repo = task_repo
        self.tenant_repo = tenant_repo
        self.audit_service = audit_service
        self.session = session

    async def create_project(self, principal: Principal, data: ProjectCreate) -> ProjectRead:
        """Create a project in the caller's tenant, capped by the plan's max_projects."""
        tenant_id = authorization.require_tenant_context(principal)

        try:
            tenant = await self.tenant_repo.get_by_id(tenant_id, for_update=True)
            if tenant is None:
                raise NotFoundError("Tenant not found")

            current = await self.project_repo.count_in_tenant(tenant_id)
            enforce_quota(current, tenant.max_projects, PROJECT_LIMIT_MESSAGE)

            project = Project(
                tenant_id=tenant_id,
                name=data.name,
                description=data.description,
                status=data.status.value,
                created_by=principal.user_id,
            )
            self.project_repo.add(project)
            await self.session.flush()

            await self.audit_service.log_action(
                tenant_id=tenant_id,
                action=AuditAction.CREATE_PROJECT,
                entity_type="project",
                entity_id=project.id,
                user_id=principal.user_id,
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project created", project_id=str(project.id))
        return ProjectRead.model_validate(project)

    async def list_projects(
        self,
        principal: Principal,
        page: int = 1,
        limit: int = DEFAULT_PROJECT_PAGE_SIZE,
        status: str | None = None,
        search: str | None = None,
    ) -> ProjectList:
        tenant_id = authorization.require_tenant_context(principal)
        page, limit = clamp_pagination(page, limit)

        rows, total = await self.project_repo.list_by_tenant(
            tenant_id, page=page, limit=limit, status=status, search=search
        )
        return ProjectList(
            projects=[_to_summary(row) for row in rows],
            total=total,
            pagination=Pagination.build(page, limit, total),
        )

    async def get_project(self, principal: Principal, project_id: UUID) -> ProjectSummary:
        tenant_id = authorization.require_tenant_context(principal)
        row = await self.project_repo.get_summary(project_id, tenant_id)
        if row is None:
            raise NotFoundError("Project not found")
        return _to_summary(row)

    async def _get_modifiable(self, principal: Principal, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(PROJECT_NOT_VISIBLE)
        authorization.require_project_visible(principal, project.tenant_id, PROJECT_NOT_VISIBLE)
        authorization.require_project_modify(principal, project.created_by)
        return project

    async def update_project(
        self, principal: Principal, project_id: UUID, data: ProjectUpdate
    ) -> ProjectUpdateResult:
        """Partial update, allowed for tenant admins and the project's creator."""
        changes = change_set(data)

        try:
            project = await self._get_modifiable(principal, project_id)
            if not changes:
                raise BadRequestError("No valid fields to update")

            updated = await self.project_repo.apply_update(project_id, changes)
            if updated is None:
                raise NotFoundError(PROJECT_NOT_VISIBLE)

            await self.audit_service.log_action(
                tenant_id=project.tenant_id,
                action=AuditAction.UPDATE_PROJECT,
                entity_type="project",
                entity_id=project_id,
                user_id=principal.user_id,
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project updated", project_id=str(project_id), fields=sorted(changes))
        return ProjectUpdateResult.model_validate(updated)

    async def delete_project(self, principal: Principal, project_id: UUID) -> None:
        """Delete a project together with all of its tasks."""
        try:
            project = await self._get_modifiable(principal, project_id)
            tenant_id = project.tenant_id

            await self.task_repo.delete_by_project(project_id)
            await self.project_repo.delete(project)
            await self.session.flush()

            await self.audit_service.log_action(
                tenant_id=tenant_id,
                action=AuditAction.DELETE_PROJECT,
                entity_type="project",
                entity_id=project_id,
                user_id=principal.user_id,
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project deleted", project_id=str(project_id))
