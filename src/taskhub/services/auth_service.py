"""Authentication service - tenant registration, login and the current profile."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskhub.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from src.taskhub.core.logging import get_logger
from src.taskhub.core.security import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    hash_password_async,
    verify_password_async,
)
from src.taskhub.models import AuditAction, Tenant, TenantStatus, User, UserRole
from src.taskhub.repositories import TenantRepository, UserRepository
from src.taskhub.schemas.auth import (
    AdminUserSummary,
    CurrentUserResponse,
    LoginResponse,
    LoginUser,
    RegisterTenantRequest,
    RegisterTenantResponse,
    TenantSummary,
)
from src.taskhub.services.audit_service import AuditService
from src.taskhub.services.authorization import Principal

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Authentication service.

    Registration needs no principal: it creates the tenant and its first
    tenant_admin. Login is tenant-scoped when the request names a tenant,
    and falls back to super-admin login otherwise.
    """

    def __init__(
        self,
        tenant_repo: TenantRepository,
        user_repo: UserRepository,
        audit_service: AuditService,
        session: AsyncSession,
    ):
        self.tenant_repo = tenant_repo
        self.user_repo = user_repo
        self.audit_service = audit_service
        self.session = session

    async def register_tenant(self, data: RegisterTenantRequest) -> RegisterTenantResponse:
        """Create a tenant on the free plan together with its admin.

        Raises ConflictError if the subdomain is taken, including when a
        concurrent registration wins the race past the pre-check.
        """
        try:
            if await self.tenant_repo.exists_by_subdomain(data.subdomain):
                raise ConflictError("Subdomain already exists")

            tenant = Tenant(
                name=data.tenant_name,
                subdomain=data.subdomain,
                status=TenantStatus.ACTIVE.value,
            )
            self.tenant_repo.add(tenant)

            admin = User(
                tenant_id=tenant.id,
                email=normalize_email(data.admin_email),
                hashed_password=await hash_password_async(data.admin_password),
                full_name=data.admin_full_name,
                role=UserRole.TENANT_ADMIN.value,
            )
            self.user_repo.add(admin)
            await self.session.flush()

            await self.audit_service.log_action(
                tenant_id=tenant.id,
                action=AuditAction.REGISTER_TENANT,
                entity_type="tenant",
                entity_id=tenant.id,
                user_id=admin.id,
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Subdomain already exists") from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Tenant registered",
            tenant_id=str(tenant.id),
            subdomain=tenant.subdomain,
            admin_user_id=str(admin.id),
        )
        return RegisterTenantResponse(
            tenant_id=tenant.id,
            subdomain=tenant.subdomain,
            admin_user=AdminUserSummary.model_validate(admin),
        )

    async def login(
        self,
        email: str,
        password: str,
        tenant_subdomain: str | None = None,
        tenant_id: UUID | None = None,
    ) -> LoginResponse:
        """Authenticate and issue an access token.

        With tenant context (tenant_id wins over tenant_subdomain) the user is
        looked up inside that tenant. Without it, only a super admin can log
        in; an unknown email then means the client forgot the tenant.
        """
        email = normalize_email(email)

        if tenant_id is not None or tenant_subdomain:
            tenant = (
                await self.tenant_repo.get_by_id(tenant_id)
                if tenant_id is not None
                else await self.tenant_repo.get_by_subdomain(tenant_subdomain.strip().lower())  # type: ignore[union-attr]
            )
            if tenant is None:
                raise NotFoundError("Tenant not found")
            if tenant.is_suspended:
                raise PermissionDeniedError("Tenant suspended")
            user = await self.user_repo.get_by_email_in_tenant(tenant.id, email)
        else:
            tenant = None
            user = await self.user_repo.get_super_admin_by_email(email)
            if user is None:
                raise BadRequestError("tenantSubdomain or tenantId is required")

        # Always verify, so unknown emails take as long as wrong passwords
        password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
        password_valid = await verify_password_async(password, password_hash)
        if user is None or not password_valid:
            logger.info("Login failed", tenant_id=str(tenant.id) if tenant else None)
            raise AuthenticationError("Invalid credentials")
        if not user.is_active:
            raise PermissionDeniedError("Account inactive")

        token, expires_in = create_access_token(user.id, user.tenant_id, user.role)

        if user.tenant_id is not None:
            await self.audit_service.log_action(
                tenant_id=user.tenant_id,
                action=AuditAction.LOGIN,
                entity_type="user",
                entity_id=user.id,
                user_id=user.id,
            )
            await self.session.commit()

        logger.info("User logged in", user_id=str(user.id), role=user.role)
        return LoginResponse(
            user=LoginUser.model_validate(user),
            token=token,
            expires_in=expires_in,
        )

    async def get_current_user(self, principal: Principal) -> CurrentUserResponse:
        row = await self.user_repo.get_with_tenant(principal.user_id)
        if row is None:
            raise NotFoundError("User not found")
        user, tenant = row
        return CurrentUserResponse(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            is_active=user.is_active,
            tenant=TenantSummary.model_validate(tenant) if tenant else None,
        )

    async def logout(self, principal: Principal) -> None:
        """Tokens are stateless; logging out only leaves an audit trail."""
        if principal.tenant_id is None:
            return
        await self.audit_service.log_action(
            tenant_id=principal.tenant_id,
            action=AuditAction.LOGOUT,
            entity_type="user",
            entity_id=principal.user_id,
            user_id=principal.user_id,
        )
        await self.session.commit()
        logger.info("User logged out", user_id=str(principal.user_id))
