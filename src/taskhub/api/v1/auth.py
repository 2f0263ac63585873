"""Authentication endpoints - tenant registration, login, profile and logout."""

from fastapi import APIRouter, status

from src.taskhub.api.dependencies import AuthServiceDep, CurrentPrincipal
from src.taskhub.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    RegisterTenantRequest,
    RegisterTenantResponse,
)
from src.taskhub.schemas.common import ApiResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register-tenant",
    response_model=ApiResponse[RegisterTenantResponse],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Validation error"},
        409: {"description": "Subdomain already exists"},
    },
)
async def register_tenant(
    data: RegisterTenantRequest, service: AuthServiceDep
) -> ApiResponse[RegisterTenantResponse]:
    """Register a new tenant on the free plan together with its first tenant admin."""
    result = await service.register_tenant(data)
    return ApiResponse(message="Tenant registered successfully", data=result)


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    responses={
        400: {"description": "Tenant context missing"},
        401: {"description": "Invalid credentials"},
        403: {"description": "Tenant suspended or account inactive"},
        404: {"description": "Tenant not found"},
    },
)
async def login(data: LoginRequest, service: AuthServiceDep) -> ApiResponse[LoginResponse]:
    """Exchange credentials for an access token.

    Tenant users must send tenantSubdomain or tenantId. Super admins log in
    without tenant context.
    """
    result = await service.login(
        email=data.email,
        password=data.password,
        tenant_subdomain=data.tenant_subdomain,
        tenant_id=data.tenant_id,
    )
    return ApiResponse(data=result)


@router.get("/me", response_model=ApiResponse[CurrentUserResponse])
async def get_me(
    principal: CurrentPrincipal, service: AuthServiceDep
) -> ApiResponse[CurrentUserResponse]:
    """Current user profile with a summary of their tenant (null for super admins)."""
    return ApiResponse(data=await service.get_current_user(principal))


@router.post("/logout", response_model=ApiResponse[None])
async def logout(principal: CurrentPrincipal, service: AuthServiceDep) -> ApiResponse[None]:
    """Tokens are stateless; the client discards its token. The logout is audited."""
    await service.logout(principal)
    return ApiResponse(message="Logged out successfully")
