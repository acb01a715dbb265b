"""
Task domain schemas.

Request/response schemas for tasks, their content and acceptance
criteria, moves, and the lookup tables.

Dependencies: pydantic
System role: Task API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CreateCriterionInput(BaseModel):
    description: str = Field(..., min_length=1)
    category: str | None = Field(None, max_length=64)
    notes: str | None = None
    order: int | None = None


class UpdateCriterionInput(BaseModel):
    """Criterion edit; entries without an id are added as new criteria."""

    id: uuid.UUID | None = None
    description: str | None = Field(None, min_length=1)
    category: str | None = Field(None, max_length=64)
    notes: str | None = None
    order: int | None = None


class TaskContentInput(BaseModel):
    acceptance_criteria: list[CreateCriterionInput] = Field(default_factory=list)
    implementation_details: str | None = None
    notes: str | None = None
    attachments: list[str] = Field(default_factory=list)
    due_date: datetime | None = None
    assignee: uuid.UUID | None = None


class UpdateTaskContentInput(BaseModel):
    acceptance_criteria: list[UpdateCriterionInput] | None = None
    implementation_details: str | None = None
    notes: str | None = None
    attachments: list[str] | None = None
    due_date: datetime | None = None
    assignee: uuid.UUID | None = None


class CreateTaskRequest(BaseModel):
    """Request schema for creating a task."""

    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    status_id: int = Field(1, ge=1)
    priority_id: int = Field(2, ge=1)
    type_id: int = Field(1, ge=1)
    board_id: uuid.UUID | None = None
    parent_id: uuid.UUID | None = None
    labels: list[str] = Field(default_factory=list)
    dependencies: list[uuid.UUID] = Field(default_factory=list)
    content: TaskContentInput = Field(default_factory=TaskContentInput)


class UpdateTaskRequest(BaseModel):
    """Partial task update."""

    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1)
    status_id: int | None = Field(None, ge=1)
    priority_id: int | None = Field(None, ge=1)
    type_id: int | None = Field(None, ge=1)
    labels: list[str] | None = None
    dependencies: list[uuid.UUID] | None = None
    content: UpdateTaskContentInput | None = None


class MoveTaskRequest(BaseModel):
    """Drag-and-drop move to a column position."""

    status_id: int = Field(..., ge=1)
    order: int = Field(..., ge=0)
    type: str | None = None
    comment: str | None = None


class MoveTaskResponse(BaseModel):
    message: str = "Task moved successfully"
    task_id: uuid.UUID
    status_id: int
    order: int


class CriterionResponse(BaseModel):
    id: uuid.UUID
    description: str
    completed: bool
    completed_at: datetime | None = None
    completed_by: uuid.UUID | None = None
    order: int
    category: str | None = None
    notes: str | None = None


class TaskProgress(BaseModel):
    total: int
    completed: int
    percentage: int


class TaskContentResponse(BaseModel):
    description: str
    acceptance_criteria: list[CriterionResponse] = Field(default_factory=list)
    implementation_details: str | None = None
    notes: str | None = None
    attachments: list[str] = Field(default_factory=list)
    due_date: datetime | None = None
    assignee: uuid.UUID | None = None


class TaskResponse(BaseModel):
    """Response schema for task operations."""

    id: uuid.UUID
    title: str
    description: str
    status_id: int
    priority_id: int
    type_id: int
    order_index: int
    owner_id: uuid.UUID | None = None
    board_id: uuid.UUID | None = None
    parent_id: uuid.UUID | None = None
    labels: list[str] = Field(default_factory=list)
    dependencies: list[uuid.UUID] = Field(default_factory=list)
    content: TaskContentResponse
    progress: TaskProgress
    created_at: datetime
    updated_at: datetime


class LookupResponse(BaseModel):
    """Row of task-statuses / task-priorities / task-types."""

    id: int
    code: str
    name: str
    display_order: int
