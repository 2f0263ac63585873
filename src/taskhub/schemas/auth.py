import re
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from src.taskhub.models.tenant import MAX_SUBDOMAIN_LENGTH
from src.taskhub.schemas.common import CamelModel

SUBDOMAIN_REGEX = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")


class RegisterTenantRequest(CamelModel):
    """Registration creates a tenant and its first tenant_admin."""

    tenant_name: str = Field(min_length=1, max_length=255)
    subdomain: str = Field(
        min_length=1,
        max_length=MAX_SUBDOMAIN_LENGTH,
        json_schema_extra={"examples": ["acme", "beta-industries"]},
    )
    admin_email: EmailStr
    admin_password: str = Field(min_length=8, max_length=128)
    admin_full_name: str = Field(min_length=1, max_length=255)

    @field_validator("subdomain", mode="before")
    @classmethod
    def normalize_subdomain(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("subdomain")
    @classmethod
    def validate_subdomain(cls, v: str) -> str:
        if not SUBDOMAIN_REGEX.match(v):
            raise ValueError(
                "Subdomain must contain only lowercase letters, numbers and hyphens, "
                "and cannot start or end with a hyphen"
            )
        return v


class AdminUserSummary(CamelModel):
    id: UUID
    email: str
    full_name: str
    role: str


class RegisterTenantResponse(CamelModel):
    tenant_id: UUID
    subdomain: str
    admin_user: AdminUserSummary


class LoginRequest(CamelModel):
    """Tenant login needs tenantSubdomain or tenantId; super admins send neither."""

    email: EmailStr
    password: str = Field(min_length=1)
    tenant_subdomain: str | None = None
    tenant_id: UUID | None = None


class LoginUser(CamelModel):
    id: UUID
    email: str
    full_name: str
    role: str
    tenant_id: UUID | None


class LoginResponse(CamelModel):
    user: LoginUser
    token: str
    expires_in: int


class TenantSummary(CamelModel):
    id: UUID
    name: str
    subdomain: str
    subscription_plan: str
    max_users: int
    max_projects: int


class CurrentUserResponse(CamelModel):
    id: UUID
    email: str
    full_name: str
    role: str
    is_active: bool
    tenant: TenantSummary | None = None
