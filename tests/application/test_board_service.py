"""
Test suite for BoardService against an in-memory database.

System role: Verification of board sharing and slugs
"""

import uuid

import pytest

from vtasker.application.services.board_service import BoardService
from vtasker.core.access import BoardRole
from vtasker.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


@pytest.fixture
def board_service(test_async_db) -> BoardService:
    return BoardService(test_async_db)


class TestCreateBoard:
    @pytest.mark.asyncio
    async def test_slugs_should_be_unique(self, board_service, owner) -> None:
        first = await board_service.create_board(owner.id, "Team Board")
        second = await board_service.create_board(owner.id, "Team  Board!")

        assert first["slug"] == "team-board"
        assert second["slug"] == "team-board-1"

    @pytest.mark.asyncio
    async def test_members_should_skip_owner_and_duplicates(self, board_service, owner, other_user) -> None:
        board = await board_service.create_board(
            owner.id,
            "Shared",
            members=[
                {"user_id": owner.id, "role": BoardRole.ADMIN},
                {"user_id": other_user.id, "role": BoardRole.EDITOR},
                {"user_id": other_user.id, "role": BoardRole.VIEWER},
            ],
        )

        assert [(m["user_id"], m["role"]) for m in board["members"]] == [(other_user.id, BoardRole.EDITOR)]
        assert board["members"][0]["name"] == "Omar Other"

    @pytest.mark.asyncio
    async def test_unknown_member_should_be_invalid_user(self, board_service, owner) -> None:
        with pytest.raises(ValidationError, match="invalid user"):
            await board_service.create_board(owner.id, "Ghosts", members=[{"user_id": uuid.uuid4()}])


class TestBoardAccess:
    @pytest.mark.asyncio
    async def test_private_board_should_be_hidden_from_strangers(self, board_service, owner, other_user) -> None:
        board = await board_service.create_board(owner.id, "Private")

        with pytest.raises(PermissionDeniedError):
            await board_service.get_board(other_user.id, board["id"])
        assert await board_service.list_boards(other_user.id) == []

    @pytest.mark.asyncio
    async def test_public_board_should_be_listed_for_everyone(self, board_service, owner, other_user) -> None:
        await board_service.create_board(owner.id, "Open", is_public=True)

        boards = await board_service.list_boards(other_user.id)

        assert [b["slug"] for b in boards] == ["open"]

    @pytest.mark.asyncio
    async def test_missing_board_should_raise_not_found(self, board_service, owner) -> None:
        with pytest.raises(NotFoundError):
            await board_service.get_board_by_slug(owner.id, "nope")


class TestUpdateAndMembers:
    @pytest.mark.asyncio
    async def test_rename_should_reslug(self, board_service, owner) -> None:
        board = await board_service.create_board(owner.id, "Old Name")

        updated = await board_service.update_board(owner.id, board["id"], {"name": "New Name"})

        assert updated["slug"] == "new-name"

    @pytest.mark.asyncio
    async def test_viewer_should_not_edit(self, board_service, owner, other_user) -> None:
        board = await board_service.create_board(
            owner.id, "Viewable", members=[{"user_id": other_user.id, "role": BoardRole.VIEWER}]
        )

        with pytest.raises(PermissionDeniedError):
            await board_service.update_board(other_user.id, board["id"], {"description": "hi"})

    @pytest.mark.asyncio
    async def test_add_member_twice_should_conflict(self, board_service, owner, other_user) -> None:
        board = await board_service.create_board(owner.id, "Members")

        added = await board_service.add_member(owner.id, board["id"], other_user.id, BoardRole.EDITOR)
        assert added["members"][0]["role"] == BoardRole.EDITOR

        with pytest.raises(ConflictError):
            await board_service.add_member(owner.id, board["id"], other_user.id)
        with pytest.raises(ConflictError):
            await board_service.add_member(owner.id, board["id"], owner.id)

    @pytest.mark.asyncio
    async def test_remove_member_should_revoke_access(self, board_service, owner, other_user) -> None:
        board = await board_service.create_board(
            owner.id, "Temp", members=[{"user_id": other_user.id, "role": BoardRole.VIEWER}]
        )
        await board_service.get_board(other_user.id, board["id"])

        await board_service.remove_member(owner.id, board["id"], other_user.id)

        with pytest.raises(PermissionDeniedError):
            await board_service.get_board(other_user.id, board["id"])
        with pytest.raises(NotFoundError):
            await board_service.remove_member(owner.id, board["id"], other_user.id)

    @pytest.mark.asyncio
    async def test_delete_requires_admin(self, board_service, owner, other_user) -> None:
        board = await board_service.create_board(
            owner.id, "Doomed", members=[{"user_id": other_user.id, "role": BoardRole.EDITOR}]
        )

        with pytest.raises(PermissionDeniedError):
            await board_service.delete_board(other_user.id, board["id"])

        await board_service.delete_board(owner.id, board["id"])
        with pytest.raises(NotFoundError):
            await board_service.get_board(owner.id, board["id"])
