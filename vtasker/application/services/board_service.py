"""
Board service orchestrator.

Coordinates boards, slugs and memberships. Every operation checks the
caller's standing on the board through BoardAccess.

Dependencies: vtasker.boundary.db.CRUD, vtasker.core.access
System role: Board use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.application.services.task_mapping import task_to_dict
from vtasker.boundary.db.CRUD.board_crud import board_crud, board_member_crud
from vtasker.boundary.db.CRUD.user_crud import user_crud
from vtasker.boundary.db.models.board_model import BoardModel
from vtasker.core.access import BoardAccess, BoardRole, next_free_slug, slugify
from vtasker.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def member_to_dict(member) -> dict:
    return {
        "user_id": member.user_id,
        "role": member.role,
        "name": member.user.name if member.user else None,
        "email": member.user.email if member.user else None,
    }


def board_to_dict(board: BoardModel, include_tasks: bool = False) -> dict:
    data = {
        "id": board.id,
        "name": board.name,
        "slug": board.slug,
        "description": board.description,
        "owner_id": board.owner_id,
        "is_public": board.is_public,
        "members": [member_to_dict(m) for m in board.members],
        "created_at": board.created_at,
        "updated_at": board.updated_at,
    }
    if include_tasks:
        tasks = sorted(board.tasks, key=lambda t: (t.status_id, t.order_index))
        data["tasks"] = [task_to_dict(t) for t in tasks]
    return data


async def load_board_access(
    db: AsyncSession,
    board_id: UUID,
    user_id: UUID,
) -> tuple[BoardModel, BoardAccess]:
    """
    Load a board and the caller's standing on it.

    Raises:
        NotFoundError: Board does not exist
    """
    board = await board_crud.get_by_id(db, board_id)
    if board is None:
        raise NotFoundError("board", board_id)
    member = await board_crud.get_member(db, board_id, user_id)
    access = BoardAccess(
        user_id=user_id,
        owner_id=board.owner_id,
        is_public=board.is_public,
        role=member.role if member else None,
    )
    return board, access


def _access_from_loaded(board: BoardModel, user_id: UUID) -> BoardAccess:
    role = next((m.role for m in board.members if m.user_id == user_id), None)
    return BoardAccess(user_id=user_id, owner_id=board.owner_id, is_public=board.is_public, role=role)


class BoardService:
    """Board service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize board service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _unique_slug(self, name: str, current: str | None = None) -> str:
        base = slugify(name)
        taken = await board_crud.slugs_with_prefix(self.db, base)
        if current is not None:
            taken.discard(current)
        return next_free_slug(base, taken)

    async def list_boards(self, user_id: UUID) -> list[dict]:
        """Boards the user owns, is a member of, or that are public."""
        boards = await board_crud.list_accessible(self.db, user_id)
        return [board_to_dict(b) for b in boards]

    async def create_board(
        self,
        owner_id: UUID,
        name: str,
        description: str | None = None,
        is_public: bool = False,
        members: list[dict] | None = None,
    ) -> dict:
        """
        Create a board with a unique slug and initial members.

        Args:
            owner_id: Creating user, owner of the board
            name: Board name; the slug is derived from it
            description: Optional description
            is_public: Visible to every signed-in user
            members: [{"user_id", "role"}]; the owner is skipped

        Raises:
            ValidationError: A member user does not exist
        """
        members = [m for m in (members or []) if m["user_id"] != owner_id]
        for member in members:
            if not await user_crud.exists(self.db, member["user_id"]):
                raise ValidationError("invalid user", field="members")

        try:
            board = await board_crud.create(
                self.db,
                name=name.strip(),
                slug=await self._unique_slug(name),
                description=description,
                owner_id=owner_id,
                is_public=is_public,
            )
            seen: set[UUID] = set()
            for member in members:
                if member["user_id"] in seen:
                    continue
                seen.add(member["user_id"])
                await board_member_crud.create(
                    self.db,
                    board_id=board.id,
                    user_id=member["user_id"],
                    role=BoardRole(member.get("role") or BoardRole.VIEWER),
                )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to create board", extra={"error": str(e), "board_name": name})
            raise

        logger.info(
            "Board created",
            extra={"board_id": str(board.id), "slug": board.slug, "member_count": len(seen)},
        )
        return board_to_dict(await board_crud.get_with_details(self.db, board.id), include_tasks=True)

    def _check_view(self, board: BoardModel, user_id: UUID) -> None:
        if not _access_from_loaded(board, user_id).can_view():
            raise PermissionDeniedError(
                "You do not have access to this board", {"board_id": str(board.id)}
            )

    async def get_board(self, user_id: UUID, board_id: UUID) -> dict:
        """
        Board with members and tasks.

        Raises:
            NotFoundError: Missing board
            PermissionDeniedError: Caller cannot view it
        """
        board = await board_crud.get_with_details(self.db, board_id)
        if board is None:
            raise NotFoundError("board", board_id)
        self._check_view(board, user_id)
        return board_to_dict(board, include_tasks=True)

    async def get_board_by_slug(self, user_id: UUID, slug: str) -> dict:
        """Same as get_board, addressed by slug."""
        board = await board_crud.get_by_slug(self.db, slug)
        if board is None:
            raise NotFoundError("board", slug)
        self._check_view(board, user_id)
        return board_to_dict(board, include_tasks=True)

    async def update_board(self, user_id: UUID, board_id: UUID, changes: dict) -> dict:
        """
        Update name, description or visibility. Renaming re-slugs.

        Raises:
            PermissionDeniedError: Caller cannot edit the board
        """
        board, access = await load_board_access(self.db, board_id, user_id)
        if not access.can_edit():
            raise PermissionDeniedError("You cannot edit this board", {"board_id": str(board_id)})

        fields = {k: v for k, v in changes.items() if v is not None}
        if "name" in fields:
            fields["name"] = fields["name"].strip()
            if fields["name"] != board.name:
                fields["slug"] = await self._unique_slug(fields["name"], current=board.slug)

        try:
            for key, value in fields.items():
                setattr(board, key, value)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to update board", extra={"error": str(e), "board_id": str(board_id)})
            raise

        logger.info("Board updated", extra={"board_id": str(board_id), "fields": sorted(fields)})
        return board_to_dict(await board_crud.get_with_details(self.db, board_id), include_tasks=True)

    async def delete_board(self, user_id: UUID, board_id: UUID) -> None:
        """
        Delete a board with its members and tasks.

        Raises:
            PermissionDeniedError: Caller is neither owner nor admin
        """
        _, access = await load_board_access(self.db, board_id, user_id)
        if not access.can_admin():
            raise PermissionDeniedError("You cannot delete this board", {"board_id": str(board_id)})

        board = await board_crud.get_with_details(self.db, board_id)
        await self.db.delete(board)
        await self.db.commit()
        logger.info("Board deleted", extra={"board_id": str(board_id)})

    async def add_member(
        self,
        user_id: UUID,
        board_id: UUID,
        member_id: UUID,
        role: BoardRole = BoardRole.VIEWER,
    ) -> dict:
        """
        Add a member to a board.

        Raises:
            PermissionDeniedError: Caller is neither owner nor admin
            ValidationError: Unknown user
            ConflictError: Already a member (or the owner)
        """
        board, access = await load_board_access(self.db, board_id, user_id)
        if not access.can_admin():
            raise PermissionDeniedError("You cannot manage members of this board", {"board_id": str(board_id)})
        if not await user_crud.exists(self.db, member_id):
            raise ValidationError("invalid user", field="user_id")
        if member_id == board.owner_id or await board_crud.get_member(self.db, board_id, member_id):
            raise ConflictError("User is already a member of this board", {"user_id": str(member_id)})

        await board_member_crud.create(self.db, board_id=board_id, user_id=member_id, role=role)
        await self.db.commit()
        logger.info(
            "Board member added",
            extra={"board_id": str(board_id), "member_id": str(member_id), "role": role.value},
        )
        return board_to_dict(await board_crud.get_with_details(self.db, board_id))

    async def remove_member(self, user_id: UUID, board_id: UUID, member_id: UUID) -> None:
        """
        Remove a member from a board.

        Raises:
            PermissionDeniedError: Caller is neither owner nor admin
            NotFoundError: Not a member
        """
        _, access = await load_board_access(self.db, board_id, user_id)
        if not access.can_admin():
            raise PermissionDeniedError("You cannot manage members of this board", {"board_id": str(board_id)})

        member = await board_crud.get_member(self.db, board_id, member_id)
        if member is None:
            raise NotFoundError("member", member_id)
        await self.db.delete(member)
        await self.db.commit()
        logger.info("Board member removed", extra={"board_id": str(board_id), "member_id": str(member_id)})
