"""
User API endpoints.

Routes:
- GET /users/me - Caller's profile
- GET /users/{id} - Profile (own only)
- PATCH /users/{id} - Update profile (own only)
- GET /user/preferences - Stored UI preferences
- PATCH /user/preferences - Merge UI preferences

Dependencies: vtasker.application.services, vtasker.models
System role: User profile HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from vtasker.api.deps.dependencies import get_current_user, get_user_service
from vtasker.api.routers.router_utils import handle_api_errors
from vtasker.application.services.auth_service import CurrentUser
from vtasker.application.services.user_service import UserService
from vtasker.models.user import (
    UpdatePreferencesRequest,
    UpdateUserRequest,
    UserPreferences,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])
preferences_router = APIRouter(prefix="/user", tags=["users"])


@router.get("/me", response_model=UserResponse)
@handle_api_errors
async def get_me(
    current: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Profile of the authenticated caller."""
    return UserResponse(**await user_service.get_user(current.id, current.id))


@router.get("/{user_id}", response_model=UserResponse)
@handle_api_errors
async def get_user(
    user_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Get a user profile.

    Raises:
        HTTPException(403): Not the caller's own profile
        HTTPException(404): User not found
    """
    return UserResponse(**await user_service.get_user(current.id, user_id))


@router.patch("/{user_id}", response_model=UserResponse)
@handle_api_errors
async def update_user(
    user_id: UUID,
    body: UpdateUserRequest,
    current: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Update name, password or avatar.

    Raises:
        HTTPException(403): Not the caller's own profile
        HTTPException(404): User not found
    """
    logger.info(
        "Updating user",
        extra={
            "user_id": str(user_id),
            "updating_name": body.name is not None,
            "updating_password": body.password is not None,
        },
    )
    data = await user_service.update_user(
        current.id,
        user_id,
        name=body.name,
        password=body.password,
        avatar_url=body.avatar_url,
    )
    return UserResponse(**data)


@preferences_router.get("/preferences", response_model=UserPreferences)
@handle_api_errors
async def get_preferences(
    current: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserPreferences:
    return UserPreferences(**await user_service.get_preferences(current.id))


@preferences_router.patch("/preferences", response_model=UserPreferences)
@handle_api_errors
async def update_preferences(
    body: UpdatePreferencesRequest,
    current: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserPreferences:
    """Merge the given keys into the stored preferences."""
    merged = await user_service.update_preferences(current.id, body.model_dump(exclude_none=True))
    return UserPreferences(**merged)
