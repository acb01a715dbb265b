"""
Lookup table CRUD operations.

Dependencies: sqlalchemy, vtasker.boundary.db.models
System role: Task status/priority/type reference data
"""

from typing import Generic, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.boundary.db.models.lookup_model import (
    DEFAULT_TASK_PRIORITIES,
    DEFAULT_TASK_STATUSES,
    DEFAULT_TASK_TYPES,
    TaskPriorityModel,
    TaskStatusModel,
    TaskTypeModel,
)

LookupT = TypeVar("LookupT", TaskStatusModel, TaskPriorityModel, TaskTypeModel)


class LookupCRUD(Generic[LookupT]):
    """Read access and seeding for one integer-keyed lookup table."""

    def __init__(self, model: type[LookupT], defaults: list[dict]) -> None:
        self.model = model
        self.defaults = defaults

    async def list_all(self, session: AsyncSession) -> Sequence[LookupT]:
        """All rows ordered by display_order."""
        result = await session.execute(select(self.model).order_by(self.model.display_order))
        return result.scalars().all()

    async def get_by_id(self, session: AsyncSession, id: int) -> LookupT | None:
        return await session.get(self.model, id)

    async def get_by_code(self, session: AsyncSession, code: str) -> LookupT | None:
        result = await session.execute(select(self.model).where(self.model.code == code))
        return result.scalar_one_or_none()

    async def seed(self, session: AsyncSession) -> int:
        """
        Insert missing default rows. Safe to run repeatedly.

        Returns:
            Number of rows inserted
        """
        existing = {row.id for row in await self.list_all(session)}
        missing = [row for row in self.defaults if row["id"] not in existing]
        for row in missing:
            session.add(self.model(**row))
        if missing:
            await session.flush()
        return len(missing)


task_status_crud = LookupCRUD(TaskStatusModel, DEFAULT_TASK_STATUSES)
task_priority_crud = LookupCRUD(TaskPriorityModel, DEFAULT_TASK_PRIORITIES)
task_type_crud = LookupCRUD(TaskTypeModel, DEFAULT_TASK_TYPES)


async def seed_lookups(session: AsyncSession) -> int:
    """Seed statuses, priorities and types. Returns rows inserted."""
    inserted = 0
    for crud in (task_status_crud, task_priority_crud, task_type_crud):
        inserted += await crud.seed(session)
    return inserted
