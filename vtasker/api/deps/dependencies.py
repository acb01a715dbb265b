"""
Dependency injection container.

Factory functions for FastAPI dependencies, including bearer token
authentication.

Dependencies: vtasker.application, vtasker.boundary
System role: DI container for service injection
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.application.services import (
    AuthService,
    BoardService,
    CurrentUser,
    IssueService,
    ProjectService,
    TaskService,
    UserService,
)
from vtasker.boundary.db import get_async_db
from vtasker.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def get_auth_service(db: AsyncSession = Depends(get_async_db)) -> AuthService:
    """
    Get auth service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        AuthService: Auth service instance
    """
    return AuthService(db=db)


def get_user_service(db: AsyncSession = Depends(get_async_db)) -> UserService:
    """Get user service instance."""
    return UserService(db=db)


def get_project_service(db: AsyncSession = Depends(get_async_db)) -> ProjectService:
    """Get project service instance."""
    return ProjectService(db=db)


def get_issue_service(db: AsyncSession = Depends(get_async_db)) -> IssueService:
    """Get issue service instance."""
    return IssueService(db=db)


def get_board_service(db: AsyncSession = Depends(get_async_db)) -> BoardService:
    """Get board service instance."""
    return BoardService(db=db)


def get_task_service(db: AsyncSession = Depends(get_async_db)) -> TaskService:
    """Get task service instance."""
    return TaskService(db=db)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    """
    Resolve the caller from an 'Authorization: Bearer <token>' header.

    The token must verify and belong to an active session.

    Returns:
        CurrentUser with id, email and session_id

    Raises:
        HTTPException 401 if authentication fails
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        return await auth_service.authenticate(parts[1])
    except AuthenticationError as e:
        logger.warning("Bearer authentication failed", extra={"error": e.message})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
