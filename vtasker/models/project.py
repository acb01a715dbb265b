"""
Project domain schemas.

Dependencies: pydantic
System role: Project API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CreateProjectRequest(BaseModel):
    """Request schema for creating a project."""

    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    description: str | None = Field(None, max_length=1000, description="Project description")


class UpdateProjectRequest(BaseModel):
    """Request schema for updating a project."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    is_archived: bool | None = None


class ProjectResponse(BaseModel):
    """Response schema for project operations."""

    id: uuid.UUID
    name: str
    description: str | None
    created_by: uuid.UUID | None
    is_archived: bool
    issue_count: int = 0
    open_issue_count: int = 0
    created_at: datetime
    updated_at: datetime


class ProjectListResponse(BaseModel):
    projects: list[ProjectResponse]
    total: int
    page: int
    page_size: int
