"""
Test suite for board access rules and slug generation.

System role: Verification of permission checks
"""

import uuid

import pytest

from vtasker.core.access import BoardAccess, BoardRole, next_free_slug, slugify


@pytest.fixture
def owner_id() -> uuid.UUID:
    return uuid.uuid4()


class TestBoardAccess:
    """Test suite for BoardAccess."""

    def test_owner_should_have_every_permission(self, owner_id) -> None:
        access = BoardAccess(user_id=owner_id, owner_id=owner_id, is_public=False)

        assert access.can_view() and access.can_edit() and access.can_admin()

    def test_stranger_should_see_public_board_only(self, owner_id) -> None:
        private = BoardAccess(user_id=uuid.uuid4(), owner_id=owner_id, is_public=False)
        public = BoardAccess(user_id=uuid.uuid4(), owner_id=owner_id, is_public=True)

        assert not private.can_view()
        assert public.can_view()
        assert not public.can_edit()

    @pytest.mark.parametrize(
        "role,edit,admin",
        [
            (BoardRole.VIEWER, False, False),
            (BoardRole.EDITOR, True, False),
            (BoardRole.ADMIN, True, True),
        ],
    )
    def test_member_roles(self, owner_id, role, edit, admin) -> None:
        access = BoardAccess(user_id=uuid.uuid4(), owner_id=owner_id, is_public=False, role=role)

        assert access.can_view()
        assert access.can_edit() is edit
        assert access.can_admin() is admin


class TestSlugs:
    def test_slugify_should_collapse_punctuation(self) -> None:
        assert slugify("  Sprint #12: Launch!! ") == "sprint-12-launch"

    def test_slugify_should_fall_back_when_empty(self) -> None:
        assert slugify("!!!") == "board"

    def test_next_free_slug_should_append_first_free_suffix(self) -> None:
        assert next_free_slug("roadmap", set()) == "roadmap"
        assert next_free_slug("roadmap", {"roadmap", "roadmap-1"}) == "roadmap-2"
