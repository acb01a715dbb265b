"""
Board access rules and slug generation.

Dependencies: re
System role: Permission checks shared by board and task services
"""

import re
from dataclasses import dataclass
from enum import Enum
from uuid import UUID

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


class BoardRole(str, Enum):
    """Member roles on a board."""

    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"


def slugify(text: str) -> str:
    """
    Build a URL slug from a board name.

    Lowercases, collapses runs of non-alphanumerics into "-" and trims
    leading/trailing dashes. Falls back to "board" when nothing is left.
    """
    slug = _NON_SLUG_CHARS.sub("-", text.lower()).strip("-")
    return slug or "board"


def next_free_slug(base: str, taken: set[str]) -> str:
    """Return base, or base-1, base-2, ... whichever is not in taken."""
    if base not in taken:
        return base
    suffix = 1
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"


@dataclass(frozen=True)
class BoardAccess:
    """Snapshot of a user's standing on a board."""

    user_id: UUID
    owner_id: UUID
    is_public: bool
    role: BoardRole | None = None

    @property
    def is_owner(self) -> bool:
        return self.user_id == self.owner_id

    def can_view(self) -> bool:
        return self.is_public or self.is_owner or self.role is not None

    def can_edit(self) -> bool:
        return self.is_owner or self.role in (BoardRole.EDITOR, BoardRole.ADMIN)

    def can_admin(self) -> bool:
        return self.is_owner or self.role == BoardRole.ADMIN
