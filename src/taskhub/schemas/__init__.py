from src.taskhub.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    RegisterTenantRequest,
    RegisterTenantResponse,
)
from src.taskhub.schemas.common import ApiResponse, CamelModel, Pagination
from src.taskhub.schemas.project import (
    ProjectCreate,
    ProjectList,
    ProjectRead,
    ProjectSummary,
    ProjectUpdate,
    ProjectUpdateResult,
)
from src.taskhub.schemas.task import (
    TaskCreate,
    TaskList,
    TaskRead,
    TaskStatusResult,
    TaskStatusUpdate,
    TaskUpdate,
    TaskUpdateResult,
)
from src.taskhub.schemas.tenant import TenantDetail, TenantList, TenantUpdate, TenantUpdateResult
from src.taskhub.schemas.user import UserCreate, UserList, UserRead, UserUpdate, UserUpdateResult

__all__ = [
    # Common
    "ApiResponse",
    "CamelModel",
    "Pagination",
    # Auth
    "CurrentUserResponse",
    "LoginRequest",
    "LoginResponse",
    "RegisterTenantRequest",
    "RegisterTenantResponse",
    # Tenant
    "TenantDetail",
    "TenantList",
    "TenantUpdate",
    "TenantUpdateResult",
    # User
    "UserCreate",
    "UserList",
    "UserRead",
    "UserUpdate",
    "UserUpdateResult",
    # Project
    "ProjectCreate",
    "ProjectList",
    "ProjectRead",
    "ProjectSummary",
    "ProjectUpdate",
    "ProjectUpdateResult",
    # Task
    "TaskCreate",
    "TaskList",
    "TaskRead",
    "TaskStatusResult",
    "TaskStatusUpdate",
    "TaskUpdate",
    "TaskUpdateResult",
]
