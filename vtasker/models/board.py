"""
Board domain schemas.

Dependencies: pydantic, vtasker.core.access
System role: Board API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from vtasker.core.access import BoardRole
from vtasker.models.task import TaskResponse


class BoardMemberInput(BaseModel):
    user_id: uuid.UUID
    role: BoardRole = BoardRole.VIEWER


class CreateBoardRequest(BaseModel):
    """Request schema for creating a board."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    is_public: bool = False
    members: list[BoardMemberInput] = Field(default_factory=list)


class UpdateBoardRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    is_public: bool | None = None


class BoardMemberResponse(BaseModel):
    user_id: uuid.UUID
    role: BoardRole
    name: str | None = None
    email: str | None = None


class BoardResponse(BaseModel):
    """Board summary."""

    id: uuid.UUID
    name: str
    slug: str
    description: str | None
    owner_id: uuid.UUID
    is_public: bool
    members: list[BoardMemberResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class BoardDetailResponse(BoardResponse):
    """Board with its tasks."""

    tasks: list[TaskResponse] = Field(default_factory=list)
