"""
Auth session CRUD operations.

Dependencies: sqlalchemy, vtasker.boundary.db.models
System role: Session lookup and revocation
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.boundary.db.CRUD.base_crud import BaseCRUD
from vtasker.boundary.db.models.auth_session_model import AuthSessionModel


class AuthSessionCRUD(BaseCRUD[AuthSessionModel]):
    """CRUD operations for AuthSessionModel."""

    def __init__(self) -> None:
        super().__init__(AuthSessionModel)

    async def get_active_by_token_hash(
        self,
        session: AsyncSession,
        token_hash: str,
        now: datetime,
    ) -> AuthSessionModel | None:
        """
        Retrieve the unrevoked, unexpired session for a token digest.

        Args:
            session: Async database session
            token_hash: sha256 hex digest of the bearer token
            now: Current UTC time

        Returns:
            AuthSessionModel if active, None otherwise
        """
        stmt = select(AuthSessionModel).where(
            AuthSessionModel.token_hash == token_hash,
            AuthSessionModel.revoked_at.is_(None),
            AuthSessionModel.expires_at > now,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        now: datetime,
    ) -> Sequence[AuthSessionModel]:
        """Active sessions for a user, most recently used first."""
        stmt = (
            select(AuthSessionModel)
            .where(
                AuthSessionModel.user_id == user_id,
                AuthSessionModel.revoked_at.is_(None),
                AuthSessionModel.expires_at > now,
            )
            .order_by(AuthSessionModel.last_used_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def revoke_all_except(
        self,
        session: AsyncSession,
        user_id: UUID,
        keep_session_id: UUID,
        now: datetime,
    ) -> int:
        """
        Revoke every active session of a user except one.

        Returns:
            Number of sessions revoked
        """
        stmt = (
            update(AuthSessionModel)
            .where(
                AuthSessionModel.user_id == user_id,
                AuthSessionModel.id != keep_session_id,
                AuthSessionModel.revoked_at.is_(None),
            )
            .values(revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount


auth_session_crud = AuthSessionCRUD()
