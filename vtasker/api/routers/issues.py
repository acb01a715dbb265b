"""
Issue API endpoints.

Routes:
- POST /issues - Create issue
- GET /issues - Filtered, paginated search
- GET /issues/{id} - Get issue
- PUT /issues/{id} - Update issue
- PATCH /issues/{id} - Update issue
- DELETE /issues/{id} - Archive issue

Dependencies: vtasker.application.services, vtasker.models
System role: Issue tracking HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from vtasker.api.deps.dependencies import get_current_user, get_issue_service
from vtasker.api.routers.router_utils import handle_api_errors
from vtasker.application.services.auth_service import CurrentUser
from vtasker.application.services.issue_service import IssueService
from vtasker.boundary.db.CRUD.issue_crud import IssueFilters
from vtasker.boundary.db.models.issue_model import IssuePriority, IssueStatus
from vtasker.models.issue import (
    CreateIssueRequest,
    IssueListResponse,
    IssueResponse,
    UpdateIssueRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/issues", tags=["issues"])


@router.post("", response_model=IssueResponse, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def create_issue(
    body: CreateIssueRequest,
    current: CurrentUser = Depends(get_current_user),
    issue_service: IssueService = Depends(get_issue_service),
) -> IssueResponse:
    """
    Create an issue.

    Raises:
        HTTPException(400): Unknown project or assignee
    """
    data = await issue_service.create_issue(
        title=body.title,
        description=body.description,
        priority=body.priority,
        status=body.status,
        project_id=body.project_id,
        assignee_id=body.assignee_id,
        created_by=current.id,
    )
    return IssueResponse(**data)


@router.get("", response_model=IssueListResponse)
@handle_api_errors
async def list_issues(
    project_id: UUID | None = None,
    status_filter: IssueStatus | None = Query(None, alias="status"),
    priority: IssuePriority | None = None,
    assignee_id: UUID | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    current: CurrentUser = Depends(get_current_user),
    issue_service: IssueService = Depends(get_issue_service),
) -> IssueListResponse:
    """Non-archived issues matching every given filter."""
    filters = IssueFilters(
        project_id=project_id,
        status=status_filter,
        priority=priority,
        assignee_id=assignee_id,
        search=search,
    )
    data = await issue_service.list_issues(filters, page=page, page_size=page_size)
    logger.info(
        "Issues retrieved",
        extra={"count": len(data["items"]), "total": data["total"], "page": page},
    )
    return IssueListResponse(**data)


@router.get("/{issue_id}", response_model=IssueResponse)
@handle_api_errors
async def get_issue(
    issue_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    issue_service: IssueService = Depends(get_issue_service),
) -> IssueResponse:
    return IssueResponse(**await issue_service.get_issue(issue_id))


@router.put("/{issue_id}", response_model=IssueResponse)
@router.patch("/{issue_id}", response_model=IssueResponse)
@handle_api_errors
async def update_issue(
    issue_id: UUID,
    body: UpdateIssueRequest,
    current: CurrentUser = Depends(get_current_user),
    issue_service: IssueService = Depends(get_issue_service),
) -> IssueResponse:
    """
    Partial update; only fields present in the body change.

    Raises:
        HTTPException(400): Unknown assignee
        HTTPException(404): Issue not found
    """
    data = await issue_service.update_issue(issue_id, body.model_dump(exclude_unset=True))
    return IssueResponse(**data)


@router.delete("/{issue_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def delete_issue(
    issue_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    issue_service: IssueService = Depends(get_issue_service),
) -> None:
    await issue_service.archive_issue(issue_id)
