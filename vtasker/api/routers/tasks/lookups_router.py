"""
Task lookup endpoints.

Routes:
- GET /task-statuses
- GET /task-priorities
- GET /task-types

Dependencies: vtasker.application.services
System role: Reference data HTTP API
"""

from fastapi import APIRouter, Depends

from vtasker.api.deps.dependencies import get_task_service
from vtasker.api.routers.router_utils import handle_api_errors
from vtasker.application.services.task_service import TaskService
from vtasker.models.task import LookupResponse

from .task_responses import map_lookups_to_response

router = APIRouter(tags=["lookups"])


@router.get("/task-statuses", response_model=list[LookupResponse])
@handle_api_errors
async def list_task_statuses(
    task_service: TaskService = Depends(get_task_service),
) -> list[LookupResponse]:
    return map_lookups_to_response(await task_service.list_statuses())


@router.get("/task-priorities", response_model=list[LookupResponse])
@handle_api_errors
async def list_task_priorities(
    task_service: TaskService = Depends(get_task_service),
) -> list[LookupResponse]:
    return map_lookups_to_response(await task_service.list_priorities())


@router.get("/task-types", response_model=list[LookupResponse])
@handle_api_errors
async def list_task_types(
    task_service: TaskService = Depends(get_task_service),
) -> list[LookupResponse]:
    return map_lookups_to_response(await task_service.list_types())
