"""
Issue ORM model.

A unit of work tracked per project with a status and a priority.

Dependencies: sqlalchemy, vtasker.boundary.db.base
System role: Issue persistence
"""

import enum
import uuid

from sqlalchemy import Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vtasker.boundary.db.base import ArchivableMixin, Base, TimestampMixin, UUIDMixin


class IssueStatus(str, enum.Enum):
    """Issue workflow states."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    IN_REVIEW = "in_review"
    DONE = "done"


class IssuePriority(str, enum.Enum):
    """Issue priorities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class IssueModel(Base, UUIDMixin, TimestampMixin, ArchivableMixin):
    """
    Issue ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Issue title (255 char limit)
        description: Optional body (up to 10000 chars, validated at the API)
        status: Workflow state, defaults to todo
        priority: low / medium / high
        project_id: Owning project
        assignee_id: Optional assigned user
        created_by: Creating user
        is_archived: Soft-delete flag
    """

    __tablename__ = "issues"

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    status: Mapped[IssueStatus] = mapped_column(
        Enum(IssueStatus, native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=IssueStatus.TODO,
    )

    priority: Mapped[IssuePriority] = mapped_column(
        Enum(IssuePriority, native_enum=False, values_callable=_enum_values),
        nullable=False,
    )

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    assignee_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    project = relationship("ProjectModel", back_populates="issues")
    assignee = relationship("UserModel", foreign_keys=[assignee_id])
