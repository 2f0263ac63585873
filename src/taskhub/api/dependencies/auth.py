"""Authentication dependencies - bearer token to Principal."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.taskhub.api.dependencies.repositories import UserRepo
from src.taskhub.core.logging import bind_principal_context
from src.taskhub.core.security import TOKEN_TYPE_ACCESS, decode_token
from src.taskhub.models import UserRole
from src.taskhub.services.authorization import Principal

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    user_repo: UserRepo,
) -> Principal:
    """Build the Principal from the access token claims.

    The user row is re-read so deleted or deactivated accounts lose access
    at once. Role and tenant still come from the claims and change at the
    next login.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Missing or invalid authorization header")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    if payload.get("type") != TOKEN_TYPE_ACCESS:
        raise _unauthorized("Invalid token type")

    try:
        user_id = UUID(payload["sub"])
        raw_tenant_id = payload.get("tenant_id")
        tenant_id = UUID(raw_tenant_id) if raw_tenant_id else None
        role = UserRole(payload["role"])
    except (KeyError, TypeError, ValueError) as e:
        raise _unauthorized("Invalid token payload") from e

    user = await user_repo.get_by_id(user_id)
    if user is None or not user.is_active:
        raise _unauthorized("User not found or inactive")

    bind_principal_context(user_id, tenant_id, role.value)
    return Principal(user_id=user_id, tenant_id=tenant_id, role=role)


CurrentPrincipal = Annotated[Principal, Depends(get_principal)]
