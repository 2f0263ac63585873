"""Audit logging service - records state-changing actions per tenant."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskhub.core.audit_context import get_audit_context
from src.taskhub.core.logging import get_logger
from src.taskhub.models import AuditAction, AuditLog
from src.taskhub.repositories import AuditLogRepository

logger = get_logger(__name__)


class AuditService:
    """Service for recording audit logs.

    Entries are written in the caller's transaction, so they commit together
    with the business change. Each write runs inside a SAVEPOINT: a failed
    audit insert is rolled back on its own, logged, and never raised.
    """

    def __init__(self, audit_repo: AuditLogRepository, session: AsyncSession):
        self.audit_repo = audit_repo
        self.session = session

    async def log_action(
        self,
        tenant_id: UUID,
        action: AuditAction | str,
        entity_type: str,
        entity_id: UUID | None = None,
        user_id: UUID | None = None,
    ) -> AuditLog | None:
        """Record an audit log entry.

        Extracts request metadata from context (IP, user agent, request_id).

        Args:
            tenant_id: Tenant the action happened in
            action: The action being performed (AuditAction enum or string)
            entity_type: Type of entity affected (e.g., "user", "project")
            entity_id: ID of the affected entity
            user_id: ID of the user performing the action

        Returns:
            The created AuditLog, or None if logging failed
        """
        action_name = action.value if isinstance(action, AuditAction) else action
        ctx = get_audit_context()
        audit_log = AuditLog(
            tenant_id=tenant_id,
            user_id=user_id,
            action=action_name,
            entity_type=entity_type,
            entity_id=entity_id,
            ip_address=ctx.ip_address if ctx else None,
            user_agent=ctx.user_agent if ctx else None,
            request_id=ctx.request_id if ctx else None,
        )

        try:
            async with self.session.begin_nested():
                self.audit_repo.add(audit_log)
        except Exception as e:
            # Only the savepoint is rolled back; the business change survives
            logger.warning(
                "Failed to record audit log",
                action=action_name,
                entity_type=entity_type,
                entity_id=str(entity_id) if entity_id else None,
                error=str(e),
            )
            return None

        logger.debug(
            "Audit log recorded",
            action=action_name,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id else None,
        )
        return audit_log
