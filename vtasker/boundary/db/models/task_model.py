"""
Task ORM models.

Tasks live on boards, ordered within their status column. Each task
carries its content, acceptance criteria, labels and dependencies.

Dependencies: sqlalchemy, vtasker.boundary.db.base
System role: Task persistence for the Kanban board
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vtasker.boundary.db.base import Base, TimestampMixin, UUIDMixin

task_dependencies = Table(
    "task_dependencies",
    Base.metadata,
    Column("task_id", Uuid(as_uuid=True), ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("depends_on_id", Uuid(as_uuid=True), ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
)


class TaskModel(Base, UUIDMixin, TimestampMixin):
    """
    Task ORM model.

    order_index is the 0-based position inside the (board, status) column.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Task title (100 char limit)
        description: Task body
        status_id / priority_id / type_id: Lookup references
        order_index: Position within the status column
        owner_id: Creating user
        board_id: Owning board (optional)
        parent_id: Parent task (optional)
        implementation_details, notes, attachments, due_date, assignee_id: Content
        labels: List of label strings

    Relationships:
        acceptance_criteria: One-to-many, ordered by order_index
        dependencies: Tasks this task depends on (many-to-many)
    """

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("task_statuses.id"), nullable=False, index=True
    )
    priority_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("task_priorities.id"), nullable=False
    )
    type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("task_types.id"), nullable=False
    )
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    owner_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    board_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tasks.id", ondelete="SET NULL"),
        nullable=True,
    )

    implementation_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    attachments: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    assignee_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    labels: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    board = relationship("BoardModel", back_populates="tasks")
    acceptance_criteria = relationship(
        "AcceptanceCriterionModel",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="AcceptanceCriterionModel.order_index",
    )
    dependencies = relationship(
        "TaskModel",
        secondary=task_dependencies,
        primaryjoin=lambda: TaskModel.id == task_dependencies.c.task_id,
        secondaryjoin=lambda: TaskModel.id == task_dependencies.c.depends_on_id,
    )


class AcceptanceCriterionModel(Base, UUIDMixin, TimestampMixin):
    """
    Acceptance criterion attached to a task.

    completed_at / completed_by are set when the criterion is checked and
    cleared when it is unchecked.
    """

    __tablename__ = "acceptance_criteria"

    task_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    task = relationship("TaskModel", back_populates="acceptance_criteria")
