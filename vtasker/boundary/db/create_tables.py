"""
Schema bootstrap for the task database.

Creates every table registered on Base.metadata and inserts the task
status, priority and type lookup rows that are missing.

Dependencies: sqlalchemy, vtasker.boundary.db
System role: Database schema initialization

Usage:
    python -m vtasker.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

import vtasker.boundary.db.models  # noqa: F401  (registers the tables)
from vtasker.boundary.db.base import Base
from vtasker.boundary.db.connection import get_async_engine
from vtasker.boundary.db.CRUD.lookup_crud import seed_lookups

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> int:
    """
    Create missing tables, then seed lookups.

    Running it against an existing schema changes nothing.

    Returns:
        int: Lookup rows inserted by this run
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(bind=engine, expire_on_commit=False)() as session:
        inserted = await seed_lookups(session)
        await session.commit()

    logger.info(
        "Schema ready",
        extra={"table_count": len(Base.metadata.tables), "lookup_rows_inserted": inserted},
    )
    return inserted


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """Drop every vTasker table. Development and tests only."""
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All tables dropped")


if __name__ == "__main__":
    from vtasker.observability.logger import configure_logging

    configure_logging()
    asyncio.run(create_all_tables())
