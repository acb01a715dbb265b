"""
User ORM model.

Represents an account holder: credentials, lockout counters and
UI preferences.

Dependencies: sqlalchemy, vtasker.boundary.db.base
System role: Identity persistence for authentication and ownership
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vtasker.boundary.db.base import Base, TimestampMixin, UUIDMixin


def default_preferences() -> dict:
    """Preferences document for a user who never saved any."""
    return {
        "theme": "light",
        "notifications": {
            "email": False,
            "taskReminders": False,
            "projectUpdates": False,
        },
    }


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Emails are stored lowercase so lookups are case-insensitive.
    failed_login_attempts counts consecutive bad passwords and is reset on
    a successful sign-in; locked_until blocks sign-in while in the future.

    Attributes:
        id: UUID primary key (auto-generated)
        email: Unique login email (lowercase)
        password_hash: bcrypt hash
        name: Display name
        avatar_url: Optional avatar location
        failed_login_attempts: Consecutive failed sign-ins
        locked_until: Lockout expiry (UTC), None when unlocked
        last_login_at: Last successful sign-in (UTC)
        preferences: JSON preferences document (theme, notifications)

    Relationships:
        sessions: One-to-many with AuthSessionModel (CASCADE on user deletion)
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        doc="Login email (lowercase)",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    avatar_url: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        default=None,
    )

    failed_login_attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    locked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    preferences: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=default_preferences,
        doc="UI preferences (theme, notification toggles)",
    )

    sessions = relationship(
        "AuthSessionModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )
