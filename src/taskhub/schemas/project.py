"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.taskhub.models import ProjectStatus
from src.taskhub.schemas.common import CamelModel, Pagination, reject_null


class ProjectCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v


class ProjectRead(CamelModel):
    id: UUID
    tenant_id: UUID
    name: str
    description: str | None
    status: str
    created_by: UUID | None
    created_at: datetime


class CreatorRef(CamelModel):
    id: UUID | None
    full_name: str | None


class ProjectSummary(CamelModel):
    id: UUID
    name: str
    description: str | None
    status: str
    created_by: CreatorRef
    task_count: int
    completed_task_count: int
    created_at: datetime
    updated_at: datetime


class ProjectList(CamelModel):
    projects: list[ProjectSummary]
    total: int
    pagination: Pagination


class ProjectUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: ProjectStatus | None = None

    _not_null = field_validator("name", "status")(reject_null)


class ProjectUpdateResult(CamelModel):
    id: UUID
    name: str
    description: str | None
    status: str
    updated_at: datetime
