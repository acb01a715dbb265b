"""
Task CRUD operations.

Provides detail loading, column ordering helpers used by task moves, and
dependency counting.

Dependencies: sqlalchemy, vtasker.boundary.db.models
System role: Task persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vtasker.boundary.db.CRUD.base_crud import BaseCRUD
from vtasker.boundary.db.models.task_model import (
    AcceptanceCriterionModel,
    TaskModel,
    task_dependencies,
)


class TaskCRUD(BaseCRUD[TaskModel]):
    """CRUD operations for TaskModel."""

    def __init__(self) -> None:
        super().__init__(TaskModel)

    async def get_with_details(self, session: AsyncSession, id: UUID) -> TaskModel | None:
        """Retrieve task with acceptance criteria and dependencies loaded."""
        stmt = (
            select(TaskModel)
            .where(TaskModel.id == id)
            .options(
                selectinload(TaskModel.acceptance_criteria),
                selectinload(TaskModel.dependencies),
            )
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_filtered(
        self,
        session: AsyncSession,
        board_id: UUID | None = None,
        status_id: int | None = None,
        priority_id: int | None = None,
        type_id: int | None = None,
    ) -> Sequence[TaskModel]:
        """Tasks matching the given filters, ordered by column then position."""
        stmt = select(TaskModel).options(
            selectinload(TaskModel.acceptance_criteria),
            selectinload(TaskModel.dependencies),
        )
        if board_id is not None:
            stmt = stmt.where(TaskModel.board_id == board_id)
        if status_id is not None:
            stmt = stmt.where(TaskModel.status_id == status_id)
        if priority_id is not None:
            stmt = stmt.where(TaskModel.priority_id == priority_id)
        if type_id is not None:
            stmt = stmt.where(TaskModel.type_id == type_id)
        stmt = stmt.order_by(TaskModel.status_id, TaskModel.order_index).execution_options(
            populate_existing=True
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def next_order_index(
        self,
        session: AsyncSession,
        board_id: UUID | None,
        status_id: int,
    ) -> int:
        """Position right after the last task in a column."""
        stmt = select(func.max(TaskModel.order_index)).where(
            TaskModel.board_id.is_(None) if board_id is None else TaskModel.board_id == board_id,
            TaskModel.status_id == status_id,
        )
        current = (await session.execute(stmt)).scalar_one_or_none()
        return 0 if current is None else current + 1

    async def column_size(
        self,
        session: AsyncSession,
        board_id: UUID | None,
        status_id: int,
        exclude_id: UUID | None = None,
    ) -> int:
        """Number of tasks in a column, optionally ignoring one task."""
        stmt = select(func.count()).select_from(TaskModel).where(
            TaskModel.board_id.is_(None) if board_id is None else TaskModel.board_id == board_id,
            TaskModel.status_id == status_id,
        )
        if exclude_id is not None:
            stmt = stmt.where(TaskModel.id != exclude_id)
        return (await session.execute(stmt)).scalar_one()

    async def shift_column(
        self,
        session: AsyncSession,
        board_id: UUID | None,
        status_id: int,
        from_index: int,
        delta: int,
        exclude_id: UUID | None = None,
        inclusive: bool = True,
    ) -> int:
        """
        Shift order_index of tasks in one column by delta.

        Args:
            session: Async database session
            board_id: Board whose column is shifted (None for board-less tasks)
            status_id: Column
            from_index: First position affected
            delta: +1 to open a gap, -1 to close one
            exclude_id: Task left untouched (the one being moved)
            inclusive: Whether from_index itself is shifted

        Returns:
            Number of tasks shifted
        """
        position = TaskModel.order_index >= from_index if inclusive else TaskModel.order_index > from_index
        conditions = [
            TaskModel.board_id.is_(None) if board_id is None else TaskModel.board_id == board_id,
            TaskModel.status_id == status_id,
            position,
        ]
        if exclude_id is not None:
            conditions.append(TaskModel.id != exclude_id)
        stmt = (
            update(TaskModel)
            .where(*conditions)
            .values(order_index=TaskModel.order_index + delta)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def count_dependents(self, session: AsyncSession, task_id: UUID) -> int:
        """Number of tasks that list task_id as a dependency."""
        stmt = (
            select(func.count())
            .select_from(task_dependencies)
            .where(task_dependencies.c.depends_on_id == task_id)
        )
        return (await session.execute(stmt)).scalar_one()

    async def get_many(self, session: AsyncSession, ids: list[UUID]) -> Sequence[TaskModel]:
        """Tasks for a list of ids (missing ids are skipped)."""
        if not ids:
            return []
        result = await session.execute(select(TaskModel).where(TaskModel.id.in_(ids)))
        return result.scalars().all()


task_crud = TaskCRUD()
criterion_crud = BaseCRUD(AcceptanceCriterionModel)
