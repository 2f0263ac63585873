"""Repository for Task entity."""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import case, delete, update
from sqlmodel import select

from src.taskhub.models import Task, TaskPriority, User
from src.taskhub.repositories.base import BaseRepository

# high sorts first
PRIORITY_RANK = case(
    {
        TaskPriority.HIGH.value: 1,
        TaskPriority.MEDIUM.value: 2,
        TaskPriority.LOW.value: 3,
    },
    value=Task.priority,
)


class TaskRepository(BaseRepository[Task]):
    model = Task

    async def list_by_project(
        self,
        project_id: UUID,
        page: int,
        limit: int,
        status: str | None = None,
        assigned_to: UUID | None = None,
        priority: str | None = None,
        search: str | None = None,
    ) -> tuple[Sequence[Any], int]:
        """Rows of (Task, assignee_full_name, assignee_email), most urgent first."""
        query = (
            select(
                Task,
                User.full_name.label("assignee_name"),  # type: ignore[attr-defined]
                User.email.label("assignee_email"),  # type: ignore[attr-defined]
            )
            .outerjoin(User, Task.assigned_to == User.id)  # type: ignore[arg-type]
            .where(Task.project_id == project_id)
        )
        if status:
            query = query.where(Task.status == status)
        if assigned_to:
            query = query.where(Task.assigned_to == assigned_to)
        if priority:
            query = query.where(Task.priority == priority)
        if search:
            query = query.where(Task.title.ilike(f"%{search}%"))  # type: ignore[attr-defined]
        return await self.paginate(
            query,
            page,
            limit,
            [PRIORITY_RANK.asc(), Task.due_date.asc().nulls_last()],  # type: ignore[union-attr]
        )

    async def delete_by_project(self, project_id: UUID) -> None:
        await self.session.execute(delete(Task).where(Task.project_id == project_id))  # type: ignore[arg-type]

    async def unassign_user(self, user_id: UUID) -> None:
        """Null every assignment pointing at a user."""
        await self.session.execute(
            update(Task).where(Task.assigned_to == user_id).values(assigned_to=None)  # type: ignore[arg-type]
        )
