from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from src.taskhub.schemas.common import CamelModel, Pagination, reject_null

AssignableRole = Literal["user", "tenant_admin"]

# Fields only a tenant admin may change
RESTRICTED_USER_FIELDS = frozenset({"role", "is_active"})


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    full_name: str = Field(min_length=1, max_length=255)
    role: AssignableRole = "user"


class UserRead(CamelModel):
    id: UUID
    email: str
    full_name: str
    role: str
    tenant_id: UUID | None
    is_active: bool
    created_at: datetime


class UserListItem(CamelModel):
    id: UUID
    email: str
    full_name: str
    role: str
    is_active: bool
    created_at: datetime


class UserList(CamelModel):
    users: list[UserListItem]
    total: int
    pagination: Pagination


class UserUpdate(CamelModel):
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    role: AssignableRole | None = None
    is_active: bool | None = None

    _not_null = field_validator("full_name", "role", "is_active")(reject_null)


class UserUpdateResult(CamelModel):
    id: UUID
    full_name: str
    role: str
    is_active: bool
    updated_at: datetime
