"""
Audit log ORM model.

Append-only record of notable domain events (task moves).

Dependencies: sqlalchemy, vtasker.boundary.db.base
System role: Change history
"""

import uuid

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vtasker.boundary.db.base import Base, TimestampMixin, UUIDMixin


class AuditLogModel(Base, UUIDMixin, TimestampMixin):
    """
    Audit log entry.

    Attributes:
        entity_type: Kind of entity (task, board, ...)
        entity_id: Affected entity
        action: Event name, e.g. "task:moved"
        actor_id: User who triggered the event
        details: Event payload
    """

    __tablename__ = "audit_logs"

    entity_type: Mapped[str] = mapped_column(String(32), nullable=False)
    entity_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    actor_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    details: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
