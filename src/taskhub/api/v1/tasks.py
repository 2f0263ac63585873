"""Task endpoints addressed by task id."""

from uuid import UUID

from fastapi import APIRouter

from src.taskhub.api.dependencies import CurrentPrincipal, TaskServiceDep
from src.taskhub.schemas.common import ApiResponse
from src.taskhub.schemas.task import (
    TaskStatusResult,
    TaskStatusUpdate,
    TaskUpdate,
    TaskUpdateResult,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.patch("/{task_id}/status", response_model=ApiResponse[TaskStatusResult])
async def update_task_status(
    task_id: UUID,
    data: TaskStatusUpdate,
    principal: CurrentPrincipal,
    service: TaskServiceDep,
) -> ApiResponse[TaskStatusResult]:
    return ApiResponse(data=await service.update_status(principal, task_id, data))


@router.put("/{task_id}", response_model=ApiResponse[TaskUpdateResult])
async def update_task(
    task_id: UUID,
    data: TaskUpdate,
    principal: CurrentPrincipal,
    service: TaskServiceDep,
) -> ApiResponse[TaskUpdateResult]:
    """Partial update. Send null for description, assignedTo or dueDate to clear them."""
    result = await service.update_task(principal, task_id, data)
    return ApiResponse(message="Task updated successfully", data=result)
