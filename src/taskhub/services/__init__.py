from src.taskhub.services.audit_service import AuditService
from src.taskhub.services.auth_service import AuthService
from src.taskhub.services.authorization import Principal
from src.taskhub.services.project_service import ProjectService
from src.taskhub.services.task_service import TaskService
from src.taskhub.services.tenant_service import TenantService
from src.taskhub.services.user_service import UserService

__all__ = [
    "AuditService",
    "AuthService",
    "Principal",
    "ProjectService",
    "TaskService",
    "TenantService",
    "UserService",
]
