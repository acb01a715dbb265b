"""
Project API endpoints.

Routes:
- POST /projects - Create project
- GET /projects - Paginated list of active projects
- GET /projects/{id} - Get project
- PATCH /projects/{id} - Update project
- DELETE /projects/{id} - Archive project

Dependencies: vtasker.application.services, vtasker.models
System role: Project management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from vtasker.api.deps.dependencies import get_current_user, get_project_service
from vtasker.api.routers.router_utils import handle_api_errors
from vtasker.application.services.auth_service import CurrentUser
from vtasker.application.services.project_service import ProjectService
from vtasker.core.exceptions import ValidationError
from vtasker.models.project import (
    CreateProjectRequest,
    ProjectListResponse,
    ProjectResponse,
    UpdateProjectRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def create_project(
    body: CreateProjectRequest,
    current: CurrentUser = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    """
    Create a project owned by the caller.

    Raises:
        HTTPException(400): Blank name
    """
    if not body.name.strip():
        raise ValidationError("Project name cannot be empty or whitespace-only", field="name")

    data = await project_service.create_project(
        name=body.name,
        description=body.description,
        created_by=current.id,
    )
    return ProjectResponse(**data)


@router.get("", response_model=ProjectListResponse)
@handle_api_errors
async def list_projects(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    current: CurrentUser = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectListResponse:
    """Active projects, newest first, with issue counters."""
    data = await project_service.list_projects(page=page, page_size=page_size)
    logger.info(
        "Projects retrieved",
        extra={"count": len(data["projects"]), "page": page, "page_size": page_size},
    )
    return ProjectListResponse(**data)


@router.get("/{project_id}", response_model=ProjectResponse)
@handle_api_errors
async def get_project(
    project_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return ProjectResponse(**await project_service.get_project(project_id))


@router.patch("/{project_id}", response_model=ProjectResponse)
@handle_api_errors
async def update_project(
    project_id: UUID,
    body: UpdateProjectRequest,
    current: CurrentUser = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    """
    Update a project.

    Raises:
        HTTPException(404): Project not found or archived
    """
    data = await project_service.update_project(project_id, **body.model_dump(exclude_unset=True))
    return ProjectResponse(**data)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def delete_project(
    project_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service),
) -> None:
    """Archive a project. It disappears from listings."""
    await project_service.archive_project(project_id)
