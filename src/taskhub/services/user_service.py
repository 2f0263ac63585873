"""User management within a tenant."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskhub.core.exceptions import BadRequestError, ConflictError, NotFoundError
from src.taskhub.core.logging import get_logger
from src.taskhub.core.security import hash_password_async
from src.taskhub.models import AuditAction, User
from src.taskhub.repositories import (
    ProjectRepository,
    TaskRepository,
    TenantRepository,
    UserRepository,
    clamp_pagination,
)
from src.taskhub.schemas.common import Pagination, change_set
from src.taskhub.schemas.user import (
    RESTRICTED_USER_FIELDS,
    UserCreate,
    UserList,
    UserListItem,
    UserRead,
    UserUpdate,
    UserUpdateResult,
)
from src.taskhub.services import authorization
from src.taskhub.services.audit_service import AuditService
from src.taskhub.services.authorization import Principal
from src.taskhub.services.auth_service import normalize_email
from src.taskhub.services.quota import USER_LIMIT_MESSAGE, enforce_quota

logger = get_logger(__name__)

DEFAULT_USER_PAGE_SIZE = 50
EMAIL_TAKEN_MESSAGE = "Email already exists in this tenant"


class UserService:
    """User management service."""

    def __init__(
        self,
        user_repo: UserRepository,
        tenant_repo: TenantRepository,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        audit_service: AuditService,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.tenant_repo = tenant_repo
        self.project_repo = project_repo
        self.task_repo = task_repo
        self.audit_service = audit_service
        self.session = session

    async def create_user(self, principal: Principal, tenant_id: UUID, data: UserCreate) -> UserRead:
        """Add a member to the admin's tenant, capped by the plan's max_users.

        The tenant row is locked while active users are counted so two
        concurrent creations cannot both squeeze under the limit.
        """
        authorization.require_tenant_admin_of(principal, tenant_id)
        email = normalize_email(data.email)
        hashed_password = await hash_password_async(data.password)

        try:
            tenant = await self.tenant_repo.get_by_id(tenant_id, for_update=True)
            if tenant is None:
                raise NotFoundError("Tenant not found")

            active_users = await self.user_repo.count_active_in_tenant(tenant_id)
            enforce_quota(active_users, tenant.max_users, USER_LIMIT_MESSAGE)

            if await self.user_repo.exists_by_email_in_tenant(tenant_id, email):
                raise ConflictError(EMAIL_TAKEN_MESSAGE)

            user = User(
                tenant_id=tenant_id,
                email=email,
                hashed_password=hashed_password,
                full_name=data.full_name,
                role=data.role,
            )
            self.user_repo.add(user)
            await self.session.flush()

            await self.audit_service.log_action(
                tenant_id=tenant_id,
                action=AuditAction.CREATE_USER,
                entity_type="user",
                entity_id=user.id,
                user_id=principal.user_id,
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(EMAIL_TAKEN_MESSAGE) from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User created", tenant_id=str(tenant_id), created_user_id=str(user.id))
        return UserRead.model_validate(user)

    async def list_users(
        self,
        principal: Principal,
        tenant_id: UUID,
        page: int = 1,
        limit: int = DEFAULT_USER_PAGE_SIZE,
        search: str | None = None,
        role: str | None = None,
    ) -> UserList:
        authorization.require_tenant_member(principal, tenant_id)
        page, limit = clamp_pagination(page, limit)

        users, total = await self.user_repo.list_by_tenant(
            tenant_id, page=page, limit=limit, search=search, role=role
        )
        return UserList(
            users=[UserListItem.model_validate(user) for user in users],
            total=total,
            pagination=Pagination.build(page, limit, total),
        )

    async def update_user(
        self, principal: Principal, user_id: UUID, data: UserUpdate
    ) -> UserUpdateResult:
        """Partial update: tenant admins may change role and status, users only their name."""
        changes = change_set(data)

        try:
            user = await self.user_repo.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")

            authorization.require_user_update(
                principal, user.id, user.tenant_id, changes.keys(), RESTRICTED_USER_FIELDS
            )
            if not changes:
                raise BadRequestError("No valid fields to update")

            reactivating = changes.get("is_active") is True and not user.is_active
            if reactivating and user.tenant_id is not None:
                await self._enforce_reactivation_quota(user.tenant_id)

            updated = await self.user_repo.apply_update(user_id, changes)
            if updated is None:
                raise NotFoundError("User not found")

            if updated.tenant_id is not None:
                await self.audit_service.log_action(
                    tenant_id=updated.tenant_id,
                    action=AuditAction.UPDATE_USER,
                    entity_type="user",
                    entity_id=user_id,
                    user_id=principal.user_id,
                )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User updated", updated_user_id=str(user_id), fields=sorted(changes))
        return UserUpdateResult.model_validate(updated)

    async def _enforce_reactivation_quota(self, tenant_id: UUID) -> None:
        """Reactivated users count again, so they go through max_users like new ones."""
        tenant = await self.tenant_repo.get_by_id(tenant_id, for_update=True)
        if tenant is None:
            raise NotFoundError("Tenant not found")
        active_users = await self.user_repo.count_active_in_tenant(tenant_id)
        enforce_quota(active_users, tenant.max_users, USER_LIMIT_MESSAGE)

    async def delete_user(self, principal: Principal, user_id: UUID) -> None:
        """Remove a member. Their task assignments and project authorship are cleared first."""
        authorization.require_user_delete(principal, user_id)

        try:
            user = await self.user_repo.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")
            authorization.require_tenant_member(principal, user.tenant_id)  # type: ignore[arg-type]

            await self.task_repo.unassign_user(user_id)
            await self.project_repo.clear_creator(user_id)
            await self.user_repo.delete(user)
            await self.session.flush()

            await self.audit_service.log_action(
                tenant_id=user.tenant_id,  # type: ignore[arg-type]
                action=AuditAction.DELETE_USER,
                entity_type="user",
                entity_id=user_id,
                user_id=principal.user_id,
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User deleted", deleted_user_id=str(user_id))
