"""
User service orchestrator.

Profile reads and updates restricted to the caller, plus the stored UI
preferences document.

Dependencies: vtasker.boundary.db.CRUD, vtasker.core.security
System role: User profile use case orchestration
"""

import copy
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.boundary.db.CRUD.user_crud import user_crud
from vtasker.boundary.db.models.user_model import UserModel, default_preferences
from vtasker.configs import get_settings
from vtasker.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from vtasker.core.security import hash_password

logger = logging.getLogger(__name__)


def user_to_dict(user: UserModel) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "avatar_url": user.avatar_url,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def merge_preferences(stored: dict | None, changes: dict) -> dict:
    """
    Deep-merge changes into a preferences document.

    Nested dicts are merged key by key; other values replace. None values in
    changes are ignored.
    """
    merged = copy.deepcopy(default_preferences())
    for source in (stored or {}, changes):
        for key, value in source.items():
            if value is None:
                continue
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = value
    return merged


class UserService:
    """User service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize user service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _load_own(self, caller_id: UUID, user_id: UUID) -> UserModel:
        if caller_id != user_id:
            logger.warning(
                "Profile access denied",
                extra={"caller_id": str(caller_id), "user_id": str(user_id)},
            )
            raise PermissionDeniedError("You can only access your own profile")
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    async def get_user(self, caller_id: UUID, user_id: UUID) -> dict:
        """
        Get a user profile.

        Raises:
            PermissionDeniedError: user_id is not the caller
            NotFoundError: User does not exist
        """
        return user_to_dict(await self._load_own(caller_id, user_id))

    async def update_user(
        self,
        caller_id: UUID,
        user_id: UUID,
        name: str | None = None,
        password: str | None = None,
        avatar_url: str | None = None,
    ) -> dict:
        """
        Update name, password or avatar of the caller's profile.

        Returns:
            dict: Updated profile

        Raises:
            PermissionDeniedError: user_id is not the caller
            NotFoundError: User does not exist
            ValidationError: Password longer than bcrypt accepts
        """
        user = await self._load_own(caller_id, user_id)
        auth = get_settings().auth

        changes: dict = {}
        if name is not None:
            changes["name"] = name.strip()
        if avatar_url is not None:
            changes["avatar_url"] = avatar_url
        if password is not None:
            if len(password.encode("utf-8")) > auth.max_password_length:
                raise ValidationError(
                    f"Password must be at most {auth.max_password_length} bytes",
                    field="password",
                )
            changes["password_hash"] = hash_password(password, auth.bcrypt_rounds)

        if not changes:
            return user_to_dict(user)

        try:
            user = await user_crud.update_by_id(self.db, user.id, **changes)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to update user", extra={"error": str(e), "user_id": str(user_id)})
            raise

        logger.info(
            "User updated",
            extra={"user_id": str(user_id), "fields": sorted(k for k in changes if k != "password_hash")},
        )
        return user_to_dict(user)

    async def get_preferences(self, user_id: UUID) -> dict:
        """Stored preferences, filled in with defaults."""
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return merge_preferences(user.preferences, {})

    async def update_preferences(self, user_id: UUID, changes: dict) -> dict:
        """Merge changes into the stored preferences and return the result."""
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise NotFoundError("user", user_id)

        # JSON columns only detect reassignment
        user.preferences = merge_preferences(user.preferences, changes)
        await self.db.commit()
        logger.info("Preferences updated", extra={"user_id": str(user_id)})
        return user.preferences
