"""
Auth session ORM model.

One row per issued access token. Tokens are never stored, only their
sha256 digest.

Dependencies: sqlalchemy, vtasker.boundary.db.base
System role: Server-side session tracking and revocation
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vtasker.boundary.db.base import Base, TimestampMixin, UUIDMixin, utcnow


class AuthSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Auth session ORM model.

    A session is active while revoked_at is NULL and expires_at is in the
    future.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owning user (CASCADE delete)
        token_hash: sha256 hex digest of the issued token (unique)
        user_agent: Client User-Agent at sign-in
        ip_address: Client address at sign-in
        last_used_at: Last authenticated request (UTC)
        expires_at: Token expiry (UTC)
        revoked_at: Revocation time (UTC), None while active
    """

    __tablename__ = "auth_sessions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )

    user_agent: Mapped[str | None] = mapped_column(String(512), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)

    last_used_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    user = relationship("UserModel", back_populates="sessions")
