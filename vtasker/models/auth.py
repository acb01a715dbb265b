"""
Auth domain schemas.

Request/response schemas for sign-up, sign-in, email checks and
session management. Wire names follow the frontend (rememberMe,
sessionId, userAgent ...).

Dependencies: pydantic
System role: Auth API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from vtasker.models.common import EMAIL_PATTERN


class CheckEmailRequest(BaseModel):
    """Request schema for the email step."""

    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)


class CheckEmailResult(BaseModel):
    exists: bool


class SignUpRequest(BaseModel):
    """Request schema for registration. Password length is checked by the service."""

    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)


class SignInRequest(BaseModel):
    """Request schema for sign-in."""

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1)
    remember_me: bool = Field(False, alias="rememberMe")


class AuthUser(BaseModel):
    """User summary returned with a token."""

    id: uuid.UUID
    email: str
    name: str


class AuthResponse(BaseModel):
    """Response schema for sign-up and sign-in."""

    token: str
    user: AuthUser


class RevokeSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: uuid.UUID = Field(..., alias="sessionId")


class SessionInfo(BaseModel):
    """One active session as listed in account settings."""

    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    user_agent: str | None = Field(None, alias="userAgent")
    ip_address: str | None = Field(None, alias="ipAddress")
    last_used: datetime = Field(..., alias="lastUsed")
    current: bool
