"""
Board ORM models.

Boards group tasks into a Kanban view. Members get a role on the board.

Dependencies: sqlalchemy, vtasker.boundary.db.base, vtasker.core.access
System role: Board and membership persistence
"""

import uuid

from sqlalchemy import Boolean, Enum, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vtasker.boundary.db.base import Base, TimestampMixin, UUIDMixin
from vtasker.core.access import BoardRole


class BoardModel(Base, UUIDMixin, TimestampMixin):
    """
    Board ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Board name
        slug: Unique URL slug derived from the name
        description: Optional description
        owner_id: Owning user (CASCADE delete)
        is_public: Visible to every signed-in user when True

    Relationships:
        members: One-to-many with BoardMemberModel (deleted with the board)
        tasks: One-to-many with TaskModel (deleted with the board)
    """

    __tablename__ = "boards"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    members = relationship(
        "BoardMemberModel",
        back_populates="board",
        cascade="all, delete-orphan",
    )
    tasks = relationship(
        "TaskModel",
        back_populates="board",
        cascade="all, delete-orphan",
    )


class BoardMemberModel(Base, UUIDMixin, TimestampMixin):
    """
    Board membership with a role.

    Constraints:
        (board_id, user_id): one membership per user per board
    """

    __tablename__ = "board_members"
    __table_args__ = (UniqueConstraint("board_id", "user_id", name="uq_board_member"),)

    board_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    role: Mapped[BoardRole] = mapped_column(
        Enum(BoardRole, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BoardRole.VIEWER,
    )

    board = relationship("BoardModel", back_populates="members")
    user = relationship("UserModel")
