"""
Project ORM model.

Container for issues. Deleting a project archives it.

Dependencies: sqlalchemy, vtasker.boundary.db.base
System role: Project persistence
"""

import uuid

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vtasker.boundary.db.base import ArchivableMixin, Base, TimestampMixin, UUIDMixin


class ProjectModel(Base, UUIDMixin, TimestampMixin, ArchivableMixin):
    """
    Project ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Project name (255 char limit)
        description: Optional description (1000 char limit)
        created_by: Creating user
        is_archived: Soft-delete flag

    Relationships:
        issues: One-to-many with IssueModel
    """

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str | None] = mapped_column(
        String(1000),
        nullable=True,
        default=None,
    )

    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    issues = relationship("IssueModel", back_populates="project")
