"""
Board CRUD operations.

Provides board lookups with eagerly loaded members and tasks, slug
collision checks and membership queries.

Dependencies: sqlalchemy, vtasker.boundary.db.models
System role: Board persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vtasker.boundary.db.CRUD.base_crud import BaseCRUD
from vtasker.boundary.db.models.board_model import BoardMemberModel, BoardModel
from vtasker.boundary.db.models.task_model import TaskModel


def _detail_options():
    return (
        selectinload(BoardModel.members).selectinload(BoardMemberModel.user),
        selectinload(BoardModel.tasks).selectinload(TaskModel.acceptance_criteria),
        selectinload(BoardModel.tasks).selectinload(TaskModel.dependencies),
    )


class BoardCRUD(BaseCRUD[BoardModel]):
    """CRUD operations for BoardModel and its memberships."""

    def __init__(self) -> None:
        super().__init__(BoardModel)

    async def get_with_details(self, session: AsyncSession, id: UUID) -> BoardModel | None:
        """Retrieve board with members (and their users) and tasks loaded."""
        stmt = (
            select(BoardModel)
            .where(BoardModel.id == id)
            .options(*_detail_options())
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(self, session: AsyncSession, slug: str) -> BoardModel | None:
        """Retrieve board by slug with members and tasks loaded."""
        stmt = (
            select(BoardModel)
            .where(BoardModel.slug == slug)
            .options(*_detail_options())
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def slugs_with_prefix(self, session: AsyncSession, base: str) -> set[str]:
        """All existing slugs equal to base or starting with "base-"."""
        stmt = select(BoardModel.slug).where(
            or_(BoardModel.slug == base, BoardModel.slug.like(f"{base}-%"))
        )
        result = await session.execute(stmt)
        return set(result.scalars().all())

    async def list_accessible(self, session: AsyncSession, user_id: UUID) -> Sequence[BoardModel]:
        """
        Boards a user can view: owned, shared with them, or public.

        Returns:
            Boards with members loaded, newest first
        """
        member_boards = select(BoardMemberModel.board_id).where(BoardMemberModel.user_id == user_id)
        stmt = (
            select(BoardModel)
            .where(
                or_(
                    BoardModel.owner_id == user_id,
                    BoardModel.is_public.is_(True),
                    BoardModel.id.in_(member_boards),
                )
            )
            .options(selectinload(BoardModel.members).selectinload(BoardMemberModel.user))
            .order_by(BoardModel.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_member(
        self,
        session: AsyncSession,
        board_id: UUID,
        user_id: UUID,
    ) -> BoardMemberModel | None:
        """Retrieve a single membership row."""
        stmt = select(BoardMemberModel).where(
            BoardMemberModel.board_id == board_id,
            BoardMemberModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


board_crud = BoardCRUD()
board_member_crud = BaseCRUD(BoardMemberModel)
