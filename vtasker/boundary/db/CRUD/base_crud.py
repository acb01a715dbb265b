"""
Generic CRUD base for vTasker models.

Model-specific CRUD classes inherit the primary-key operations and the
paged listing helper. Methods flush but never commit; the service that
called them owns the transaction.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from vtasker.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key operations shared by every model CRUD.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """Insert a row and return it with generated id and timestamps."""
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update_by_id(self, session: AsyncSession, id: UUID, **kwargs) -> ModelT | None:
        """
        Assign attributes on the loaded row so updated_at is refreshed.

        Returns:
            The updated row, None when no row has this id
        """
        instance = await self.get_by_id(session, id)
        if instance is None:
            return None
        for field, value in kwargs.items():
            setattr(instance, field, value)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        result = await session.execute(select(self.model.id).where(self.model.id == id))
        return result.scalar_one_or_none() is not None

    async def page(
        self,
        session: AsyncSession,
        conditions: list[ColumnElement[bool]],
        limit: int,
        offset: int = 0,
        options: Sequence[ORMOption] = (),
    ) -> tuple[Sequence[ModelT], int]:
        """
        One page of matching rows, newest first, with the total match count.

        Args:
            conditions: WHERE clauses, combined with AND
            limit: Page size
            offset: Rows to skip
            options: Loader options for the page query
        """
        total_stmt = select(func.count()).select_from(self.model).where(*conditions)
        total = (await session.execute(total_stmt)).scalar_one()

        stmt = (
            select(self.model)
            .where(*conditions)
            .options(*options)
            .execution_options(populate_existing=True)
            .order_by(self.model.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all(), total
