"""Startup provisioning of the platform super admin."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskhub.core.config import Settings
from src.taskhub.core.logging import get_logger
from src.taskhub.core.security import hash_password_async
from src.taskhub.models import User, UserRole
from src.taskhub.repositories import UserRepository
from src.taskhub.services.auth_service import normalize_email

logger = get_logger(__name__)


async def ensure_super_admin(session: AsyncSession, settings: Settings) -> User | None:
    """Create the configured super admin if it does not exist yet.

    Does nothing unless both SUPERADMIN_EMAIL and SUPERADMIN_PASSWORD are set.
    An existing account is left untouched (its password is not reset).
    """
    if not settings.superadmin_email or not settings.superadmin_password:
        return None

    email = normalize_email(settings.superadmin_email)
    user_repo = UserRepository(session)
    existing = await user_repo.get_super_admin_by_email(email)
    if existing is not None:
        return existing

    user = User(
        tenant_id=None,
        email=email,
        hashed_password=await hash_password_async(settings.superadmin_password),
        full_name=settings.superadmin_full_name,
        role=UserRole.SUPER_ADMIN.value,
    )
    try:
        user_repo.add(user)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    logger.info("Super admin created", user_id=str(user.id))
    return user
