"""Project endpoints, plus task creation and listing within a project."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.taskhub.api.dependencies import CurrentPrincipal, ProjectServiceDep, TaskServiceDep
from src.taskhub.models import ProjectStatus, TaskPriority, TaskStatus
from src.taskhub.schemas.common import ApiResponse
from src.taskhub.schemas.project import (
    ProjectCreate,
    ProjectList,
    ProjectRead,
    ProjectSummary,
    ProjectUpdate,
    ProjectUpdateResult,
)
from src.taskhub.schemas.task import TaskCreate, TaskList, TaskRead
from src.taskhub.services.project_service import DEFAULT_PROJECT_PAGE_SIZE
from src.taskhub.services.task_service import DEFAULT_TASK_PAGE_SIZE

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post(
    "",
    response_model=ApiResponse[ProjectRead],
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Project limit reached"}},
)
async def create_project(
    data: ProjectCreate, principal: CurrentPrincipal, service: ProjectServiceDep
) -> ApiResponse[ProjectRead]:
    return ApiResponse(data=await service.create_project(principal, data))


@router.get("", response_model=ApiResponse[ProjectList])
async def list_projects(
    principal: CurrentPrincipal,
    service: ProjectServiceDep,
    page: int = 1,
    limit: int = DEFAULT_PROJECT_PAGE_SIZE,
    project_status: Annotated[ProjectStatus | None, Query(alias="status")] = None,
    search: str | None = None,
) -> ApiResponse[ProjectList]:
    """List the tenant's projects newest first, with task counters."""
    result = await service.list_projects(
        principal,
        page=page,
        limit=limit,
        status=project_status.value if project_status else None,
        search=search,
    )
    return ApiResponse(data=result)


@router.get("/{project_id}", response_model=ApiResponse[ProjectSummary])
async def get_project(
    project_id: UUID, principal: CurrentPrincipal, service: ProjectServiceDep
) -> ApiResponse[ProjectSummary]:
    return ApiResponse(data=await service.get_project(principal, project_id))


@router.put("/{project_id}", response_model=ApiResponse[ProjectUpdateResult])
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    principal: CurrentPrincipal,
    service: ProjectServiceDep,
) -> ApiResponse[ProjectUpdateResult]:
    """Allowed for tenant admins and the project's creator."""
    result = await service.update_project(principal, project_id, data)
    return ApiResponse(message="Project updated successfully", data=result)


@router.delete("/{project_id}", response_model=ApiResponse[None])
async def delete_project(
    project_id: UUID, principal: CurrentPrincipal, service: ProjectServiceDep
) -> ApiResponse[None]:
    """Delete the project and every task in it."""
    await service.delete_project(principal, project_id)
    return ApiResponse(message="Project deleted successfully")


@router.post(
    "/{project_id}/tasks",
    response_model=ApiResponse[TaskRead],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Assigned user does not belong to this tenant"},
        403: {"description": "Project does not belong to your tenant"},
        404: {"description": "Project not found"},
    },
)
async def create_task(
    project_id: UUID,
    data: TaskCreate,
    principal: CurrentPrincipal,
    service: TaskServiceDep,
) -> ApiResponse[TaskRead]:
    return ApiResponse(data=await service.create_task(principal, project_id, data))


@router.get("/{project_id}/tasks", response_model=ApiResponse[TaskList])
async def list_tasks(
    project_id: UUID,
    principal: CurrentPrincipal,
    service: TaskServiceDep,
    page: int = 1,
    limit: int = DEFAULT_TASK_PAGE_SIZE,
    task_status: Annotated[TaskStatus | None, Query(alias="status")] = None,
    assigned_to: Annotated[UUID | None, Query(alias="assignedTo")] = None,
    priority: TaskPriority | None = None,
    search: str | None = None,
) -> ApiResponse[TaskList]:
    """List the project's tasks, high priority first, then by due date."""
    result = await service.list_tasks(
        principal,
        project_id,
        page=page,
        limit=limit,
        status=task_status.value if task_status else None,
        assigned_to=assigned_to,
        priority=priority.value if priority else None,
        search=search,
    )
    return ApiResponse(data=result)
