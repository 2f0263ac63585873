from datetime import date, datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.taskhub.models import TaskPriority, TaskStatus
from src.taskhub.schemas.common import CamelModel, Pagination, reject_null


class TaskCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    assigned_to: UUID | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None


class TaskRead(CamelModel):
    id: UUID
    project_id: UUID
    tenant_id: UUID
    title: str
    description: str | None
    status: str
    priority: str
    assigned_to: UUID | None
    due_date: date | None
    created_at: datetime


class AssigneeRef(CamelModel):
    id: UUID
    full_name: str
    email: str


class TaskSummary(CamelModel):
    id: UUID
    title: str
    description: str | None
    status: str
    priority: str
    assigned_to: AssigneeRef | None
    due_date: date | None
    created_at: datetime


class TaskList(CamelModel):
    tasks: list[TaskSummary]
    total: int
    pagination: Pagination


class TaskStatusUpdate(CamelModel):
    status: TaskStatus


class TaskStatusResult(CamelModel):
    id: UUID
    status: str
    updated_at: datetime


class TaskUpdate(CamelModel):
    """description, assignedTo and dueDate may be sent as null to clear them."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assigned_to: UUID | None = None
    due_date: date | None = None

    _not_null = field_validator("title", "status", "priority")(reject_null)


class TaskUpdateResult(CamelModel):
    id: UUID
    title: str
    description: str | None
    status: str
    priority: str
    assigned_to: AssigneeRef | None
    due_date: date | None
    updated_at: datetime
