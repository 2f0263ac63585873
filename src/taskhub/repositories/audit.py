"""Repository for AuditLog entity."""

from src.taskhub.models import AuditLog
from src.taskhub.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    """Write-only: entries are added, never listed by the application."""

    model = AuditLog
