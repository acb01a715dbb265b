"""
Issue domain schemas.

Dependencies: pydantic, vtasker.boundary.db.models
System role: Issue API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from vtasker.boundary.db.models.issue_model import IssuePriority, IssueStatus


class CreateIssueRequest(BaseModel):
    """Request schema for creating an issue."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=10000)
    priority: IssuePriority
    status: IssueStatus = IssueStatus.TODO
    project_id: uuid.UUID
    assignee_id: uuid.UUID | None = None


class UpdateIssueRequest(BaseModel):
    """Partial issue update."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=10000)
    priority: IssuePriority | None = None
    status: IssueStatus | None = None
    assignee_id: uuid.UUID | None = None


class IssueResponse(BaseModel):
    """Response schema for issue operations."""

    id: uuid.UUID
    title: str
    description: str | None
    status: IssueStatus
    priority: IssuePriority
    project_id: uuid.UUID
    project_name: str | None = None
    assignee_id: uuid.UUID | None = None
    assignee_name: str | None = None
    created_by: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime


class IssueListResponse(BaseModel):
    items: list[IssueResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
