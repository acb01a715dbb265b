"""
User domain schemas.

Dependencies: pydantic
System role: User profile and preferences API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Public profile of a user."""

    id: uuid.UUID
    email: str
    name: str
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime


class UpdateUserRequest(BaseModel):
    """Partial profile update."""

    name: str | None = Field(None, min_length=1, max_length=255)
    password: str | None = Field(None, min_length=8, max_length=72)
    avatar_url: str | None = Field(None, max_length=1024)


class NotificationPreferences(BaseModel):
    email: bool = False
    taskReminders: bool = False
    projectUpdates: bool = False


class UserPreferences(BaseModel):
    """Stored UI preferences."""

    theme: Literal["light", "dark", "system"] = "light"
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)


class UpdatePreferencesRequest(BaseModel):
    """Partial preferences update, merged into the stored document."""

    theme: Literal["light", "dark", "system"] | None = None
    notifications: dict[str, bool] | None = None
