"""Task service - tasks inside projects, with tenant-checked assignment."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskhub.core.exceptions import BadRequestError, NotFoundError
from src.taskhub.core.logging import get_logger
from src.taskhub.models import AuditAction, Project, Task, TaskStatus
from src.taskhub.repositories import (
    ProjectRepository,
    TaskRepository,
    UserRepository,
    clamp_pagination,
)
from src.taskhub.schemas.common import Pagination, change_set
from src.taskhub.schemas.task import (
    AssigneeRef,
    TaskCreate,
    TaskList,
    TaskRead,
    TaskStatusResult,
    TaskStatusUpdate,
    TaskSummary,
    TaskUpdate,
    TaskUpdateResult,
)
from src.taskhub.services import authorization
from src.taskhub.services.audit_service import AuditService
from src.taskhub.services.authorization import Principal

logger = get_logger(__name__)

DEFAULT_TASK_PAGE_SIZE = 50


class TaskService:
    """Task management.

    Unlike projects, a task (or a parent project reached through the task
    routes) that exists in another tenant is reported as 403, not 404.
    """

    def __init__(
        self,
        task_repo: TaskRepository,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        audit_service: AuditService,
        session: AsyncSession,
    ):
        self.task_repo = task_repo
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.audit_service = audit_service
        self.session = session

    async def _get_project(self, principal: Principal, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        authorization.require_same_tenant(
            principal, project.tenant_id, "Project does not belong to your tenant"
        )
        return project

    async def _get_task(self, principal: Principal, task_id: UUID) -> Task:
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        authorization.require_same_tenant(
            principal, task.tenant_id, "Task does not belong to your tenant"
        )
        return task

    async def _check_assignee(self, assignee_id: UUID | None, tenant_id: UUID) -> None:
        if assignee_id is not None and not await self.user_repo.exists_in_tenant(
            assignee_id, tenant_id
        ):
            raise BadRequestError("Assigned user does not belong to this tenant")

    async def _assignee_ref(self, assignee_id: UUID | None) -> AssigneeRef | None:
        if assignee_id is None:
            return None
        assignee = await self.user_repo.get_by_id(assignee_id)
        return AssigneeRef.model_validate(assignee) if assignee else None

    async def create_task(
        self, principal: Principal, project_id: UUID, data: TaskCreate
    ) -> TaskRead:
        """Create a task in a project of the caller's tenant. New tasks always start as todo."""
        try:
            project = await self._get_project(principal, project_id)
            await self._check_assignee(data.assigned_to, project.tenant_id)

            task = Task(
                project_id=project.id,
                tenant_id=project.tenant_id,
                title=data.title,
                description=data.description,
                status=TaskStatus.TODO.value,
                priority=data.priority.value,
                assigned_to=data.assigned_to,
                due_date=data.due_date,
            )
            self.task_repo.add(task)
            await self.session.flush()

            await self.audit_service.log_action(
                tenant_id=project.tenant_id,
                action=AuditAction.CREATE_TASK,
                entity_type="task",
                entity_id=task.id,
                user_id=principal.user_id,
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task created", task_id=str(task.id), project_id=str(project_id))
        return TaskRead.model_validate(task)

    async def list_tasks(
        self,
        principal: Principal,
        project_id: UUID,
        page: int = 1,
        limit: int = DEFAULT_TASK_PAGE_SIZE,
        status: str | None = None,
        assigned_to: UUID | None = None,
        priority: str | None = None,
        search: str | None = None,
    ) -> TaskList:
        """List a project's tasks, high priority first, then by due date."""
        await self._get_project(principal, project_id)
        page, limit = clamp_pagination(page, limit)

        rows, total = await self.task_repo.list_by_project(
            project_id,
            page=page,
            limit=limit,
            status=status,
            assigned_to=assigned_to,
            priority=priority,
            search=search,
        )
        tasks = [
            TaskSummary(
                id=task.id,
                title=task.title,
                description=task.description,
                status=task.status,
                priority=task.priority,
                assigned_to=(
                    AssigneeRef(id=task.assigned_to, full_name=name, email=email)
                    if task.assigned_to is not None
                    else None
                ),
                due_date=task.due_date,
                created_at=task.created_at,
            )
            for task, name, email in rows
        ]
        return TaskList(tasks=tasks, total=total, pagination=Pagination.build(page, limit, total))

    async def update_status(
        self, principal: Principal, task_id: UUID, data: TaskStatusUpdate
    ) -> TaskStatusResult:
        try:
            task = await self._get_task(principal, task_id)
            updated = await self.task_repo.apply_update(task_id, {"status": data.status.value})
            if updated is None:
                raise NotFoundError("Task not found")

            await self.audit_service.log_action(
                tenant_id=task.tenant_id,
                action=AuditAction.UPDATE_TASK_STATUS,
                entity_type="task",
                entity_id=task_id,
                user_id=principal.user_id,
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task status changed", task_id=str(task_id), status=updated.status)
        return TaskStatusResult.model_validate(updated)

    async def update_task(
        self, principal: Principal, task_id: UUID, data: TaskUpdate
    ) -> TaskUpdateResult:
        """Partial update. description, assigned_to and due_date can be cleared with null."""
        changes = change_set(data)

        try:
            task = await self._get_task(principal, task_id)
            await self._check_assignee(changes.get("assigned_to"), task.tenant_id)
            if not changes:
                raise BadRequestError("No valid fields to update")

            updated = await self.task_repo.apply_update(task_id, changes)
            if updated is None:
                raise NotFoundError("Task not found")

            await self.audit_service.log_action(
                tenant_id=task.tenant_id,
                action=AuditAction.UPDATE_TASK,
                entity_type="task",
                entity_id=task_id,
                user_id=principal.user_id,
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task updated", task_id=str(task_id), fields=sorted(changes))
        return TaskUpdateResult(
            id=updated.id,
            title=updated.title,
            description=updated.description,
            status=updated.status,
            priority=updated.priority,
            assigned_to=await self._assignee_ref(updated.assigned_to),
            due_date=updated.due_date,
            updated_at=updated.updated_at,
        )
