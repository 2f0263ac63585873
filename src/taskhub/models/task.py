"""Task model - belongs to a project, tenant_id copied from it."""

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskhub.models.base import utc_now
from src.taskhub.models.enums import TaskPriority, TaskStatus


class Task(SQLModel, table=True):
    """Task entity.

    tenant_id duplicates the owning project's tenant so authorization checks
    do not need a join.
    """

    __tablename__ = "tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True, ondelete="CASCADE")
    title: str = Field(max_length=255)
    description: str | None = Field(default=None)
    status: str = Field(default=TaskStatus.TODO.value, max_length=20)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    assigned_to: UUID | None = Field(
        default=None, foreign_key="users.id", index=True, ondelete="SET NULL"
    )
    due_date: date | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
