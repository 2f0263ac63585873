"""User endpoints addressed by user id."""

from uuid import UUID

from fastapi import APIRouter

from src.taskhub.api.dependencies import CurrentPrincipal, UserServiceDep
from src.taskhub.schemas.common import ApiResponse
from src.taskhub.schemas.user import UserUpdate, UserUpdateResult

router = APIRouter(prefix="/users", tags=["users"])


@router.put("/{user_id}", response_model=ApiResponse[UserUpdateResult])
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    principal: CurrentPrincipal,
    service: UserServiceDep,
) -> ApiResponse[UserUpdateResult]:
    """Users may change their own name; tenant admins also role and active flag."""
    result = await service.update_user(principal, user_id, data)
    return ApiResponse(message="User updated successfully", data=result)


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(
    user_id: UUID, principal: CurrentPrincipal, service: UserServiceDep
) -> ApiResponse[None]:
    """Delete a member of the admin's tenant. Their tasks become unassigned."""
    await service.delete_user(principal, user_id)
    return ApiResponse(message="User deleted successfully")
