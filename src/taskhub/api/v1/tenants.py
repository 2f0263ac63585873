"""Tenant endpoints, plus user creation and listing scoped to a tenant."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.taskhub.api.dependencies import CurrentPrincipal, TenantServiceDep, UserServiceDep
from src.taskhub.models import SubscriptionPlan, TenantStatus, UserRole
from src.taskhub.schemas.common import ApiResponse
from src.taskhub.schemas.tenant import TenantDetail, TenantList, TenantUpdate, TenantUpdateResult
from src.taskhub.schemas.user import UserCreate, UserList, UserRead
from src.taskhub.services.tenant_service import DEFAULT_TENANT_PAGE_SIZE
from src.taskhub.services.user_service import DEFAULT_USER_PAGE_SIZE

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("", response_model=ApiResponse[TenantList])
async def list_tenants(
    principal: CurrentPrincipal,
    service: TenantServiceDep,
    page: int = 1,
    limit: int = DEFAULT_TENANT_PAGE_SIZE,
    tenant_status: Annotated[TenantStatus | None, Query(alias="status")] = None,
    subscription_plan: Annotated[
        SubscriptionPlan | None, Query(alias="subscriptionPlan")
    ] = None,
) -> ApiResponse[TenantList]:
    """List every tenant with user and project counts. Super admins only."""
    result = await service.list_tenants(
        principal,
        page=page,
        limit=limit,
        status=tenant_status.value if tenant_status else None,
        subscription_plan=subscription_plan.value if subscription_plan else None,
    )
    return ApiResponse(data=result)


@router.get("/{tenant_id}", response_model=ApiResponse[TenantDetail])
async def get_tenant(
    tenant_id: UUID, principal: CurrentPrincipal, service: TenantServiceDep
) -> ApiResponse[TenantDetail]:
    return ApiResponse(data=await service.get_tenant(principal, tenant_id))


@router.put(
    "/{tenant_id}",
    response_model=ApiResponse[TenantUpdateResult],
    responses={403: {"description": "Not allowed, or restricted fields sent by a tenant admin"}},
)
async def update_tenant(
    tenant_id: UUID,
    data: TenantUpdate,
    principal: CurrentPrincipal,
    service: TenantServiceDep,
) -> ApiResponse[TenantUpdateResult]:
    """Update a tenant. Tenant admins may only rename their own tenant."""
    result = await service.update_tenant(principal, tenant_id, data)
    return ApiResponse(message="Tenant updated successfully", data=result)


@router.post(
    "/{tenant_id}/users",
    response_model=ApiResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"description": "Not a tenant admin of this tenant, or user limit reached"},
        409: {"description": "Email already exists in this tenant"},
    },
)
async def create_user(
    tenant_id: UUID,
    data: UserCreate,
    principal: CurrentPrincipal,
    service: UserServiceDep,
) -> ApiResponse[UserRead]:
    result = await service.create_user(principal, tenant_id, data)
    return ApiResponse(message="User created successfully", data=result)


@router.get("/{tenant_id}/users", response_model=ApiResponse[UserList])
async def list_users(
    tenant_id: UUID,
    principal: CurrentPrincipal,
    service: UserServiceDep,
    page: int = 1,
    limit: int = DEFAULT_USER_PAGE_SIZE,
    search: str | None = None,
    role: UserRole | None = None,
) -> ApiResponse[UserList]:
    """List the tenant's users. Search matches full name or email."""
    result = await service.list_users(
        principal,
        tenant_id,
        page=page,
        limit=limit,
        search=search,
        role=role.value if role else None,
    )
    return ApiResponse(data=result)
