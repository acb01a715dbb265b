"""
Task API endpoints.

Routes:
- GET /tasks - List tasks (board/status/priority/type filters)
- POST /tasks - Create task
- GET /tasks/{id} - Get task with progress
- PUT /tasks/{id} - Update task
- POST /tasks/{id}/move - Move task to a column position
- POST /tasks/{id}/criteria/{criterion_id}/toggle - Toggle a criterion
- DELETE /tasks/{id} - Delete task

Dependencies: vtasker.application.services, vtasker.models
System role: Task management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from vtasker.api.deps.dependencies import get_current_user, get_task_service
from vtasker.api.routers.router_utils import handle_api_errors
from vtasker.application.services.auth_service import CurrentUser
from vtasker.application.services.task_service import TaskService
from vtasker.models.task import (
    CreateTaskRequest,
    MoveTaskRequest,
    MoveTaskResponse,
    TaskResponse,
    UpdateTaskRequest,
)

from .task_responses import (
    map_move_to_response,
    map_task_to_response,
    map_tasks_to_response,
)
from .task_validators import (
    validate_task_creation,
    validate_task_move,
    validate_task_update,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
@handle_api_errors
async def list_tasks(
    board_id: UUID | None = None,
    status_id: int | None = None,
    priority_id: int | None = None,
    type_id: int | None = None,
    current: CurrentUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    """
    List tasks ordered by status then position.

    Args:
        board_id: Only tasks on this board
        status_id: Only tasks in this column
        priority_id: Only tasks with this priority
        type_id: Only tasks of this type
        current: Authenticated caller
        task_service: Injected TaskService

    Returns:
        list[TaskResponse]: Matching tasks

    Raises:
        HTTPException(403): Board not viewable by the caller
    """
    tasks = await task_service.list_tasks(
        current.id,
        board_id=board_id,
        status_id=status_id,
        priority_id=priority_id,
        type_id=type_id,
    )
    logger.info(
        "Tasks retrieved",
        extra={"count": len(tasks), "board_id": str(board_id) if board_id else None},
    )
    return map_tasks_to_response(tasks)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def create_task(
    body: CreateTaskRequest,
    current: CurrentUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Create a task at the end of its status column.

    Raises:
        HTTPException(400): Invalid lookup id, parent, dependency or assignee
        HTTPException(403): Caller cannot edit the board
    """
    # Business validation
    validate_task_creation(body)

    logger.info(
        "Creating task",
        extra={
            "title": body.title,
            "board_id": str(body.board_id) if body.board_id else None,
            "criteria_count": len(body.content.acceptance_criteria),
        },
    )
    task = await task_service.create_task(current.id, body.model_dump())
    return map_task_to_response(task)


@router.get("/{task_id}", response_model=TaskResponse)
@handle_api_errors
async def get_task(
    task_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Get a task with criteria, dependencies and progress.

    Raises:
        HTTPException(404): Task not found
    """
    return map_task_to_response(await task_service.get_task(current.id, task_id))


@router.put("/{task_id}", response_model=TaskResponse)
@handle_api_errors
async def update_task(
    task_id: UUID,
    body: UpdateTaskRequest,
    current: CurrentUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Partial update. Criteria with an id are edited, others are added.

    Raises:
        HTTPException(400): Invalid field values
        HTTPException(404): Task or criterion not found
    """
    validate_task_update(body)
    task = await task_service.update_task(current.id, task_id, body.model_dump(exclude_unset=True))
    return map_task_to_response(task)


@router.post("/{task_id}/move", response_model=MoveTaskResponse)
@handle_api_errors
async def move_task(
    task_id: UUID,
    body: MoveTaskRequest,
    current: CurrentUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> MoveTaskResponse:
    """
    Move a task to a position in a status column.

    Raises:
        HTTPException(400): Unknown status or task type
        HTTPException(404): Task not found
    """
    validate_task_move(body)

    result = await task_service.move_task(
        current.id,
        task_id,
        status_id=body.status_id,
        order=body.order,
        type_code=body.type,
        comment=body.comment,
    )
    return map_move_to_response(result)


@router.post("/{task_id}/criteria/{criterion_id}/toggle", response_model=TaskResponse)
@handle_api_errors
async def toggle_criterion(
    task_id: UUID,
    criterion_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = await task_service.toggle_criterion(current.id, task_id, criterion_id)
    return map_task_to_response(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def delete_task(
    task_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> None:
    """
    Delete a task.

    Raises:
        HTTPException(404): Task not found
        HTTPException(409): Other tasks depend on it (detail carries dependent_count)
    """
    await task_service.delete_task(current.id, task_id)
