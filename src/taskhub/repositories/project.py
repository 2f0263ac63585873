"""Repository for Project entity."""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select

from src.taskhub.models import Project, Task, TaskStatus, User
from src.taskhub.repositories.base import BaseRepository


def _task_count(*conditions: Any) -> Any:
    return (
        select(func.count())
        .select_from(Task)
        .where(Task.project_id == Project.id, *conditions)
        .correlate(Project)
        .scalar_subquery()
    )


def _summary_query() -> Any:
    """Rows of (Project, creator_full_name, task_count, completed_task_count)."""
    return select(
        Project,
        User.full_name.label("creator_name"),  # type: ignore[attr-defined]
        _task_count().label("task_count"),
        _task_count(Task.status == TaskStatus.COMPLETED.value).label("completed_task_count"),
    ).outerjoin(User, Project.created_by == User.id)  # type: ignore[arg-type]


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def get_summary(self, project_id: UUID, tenant_id: UUID) -> Any | None:
        query = _summary_query().where(Project.id == project_id, Project.tenant_id == tenant_id)
        result = await self.session.execute(query)
        return result.one_or_none()

    async def count_in_tenant(self, tenant_id: UUID) -> int:
        return await self.count(Project.tenant_id == tenant_id)

    async def list_by_tenant(
        self,
        tenant_id: UUID,
        page: int,
        limit: int,
        status: str | None = None,
        search: str | None = None,
    ) -> tuple[Sequence[Any], int]:
        """List project summaries newest first."""
        query = _summary_query().where(Project.tenant_id == tenant_id)
        if status:
            query = query.where(Project.status == status)
        if search:
            query = query.where(Project.name.ilike(f"%{search}%"))  # type: ignore[attr-defined]
        return await self.paginate(query, page, limit, [Project.created_at.desc()])  # type: ignore[attr-defined]

    async def clear_creator(self, user_id: UUID) -> None:
        """Detach projects from a creator that is about to be deleted."""
        await self.session.execute(
            update(Project).where(Project.created_by == user_id).values(created_by=None)  # type: ignore[arg-type]
        )
