"""
Engine and session lifecycle.

One async engine per process, a session factory bound to it, and the
request-scoped session dependency used by every service factory.

Dependencies: sqlalchemy, vtasker.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from vtasker.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """Process-wide engine built from DatabaseSettings."""
    db_config = get_settings().database
    return create_async_engine(db_config.async_database_url, **db_config.engine_options())


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Session factory for the shared engine.

    Services flush explicitly (autoflush=False) and keep reading loaded
    rows after commit (expire_on_commit=False).
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request, closed when the response is sent.

    Usage:
        @router.get("/tasks/{task_id}")
        async def get_task(task_id: UUID, db: AsyncSession = Depends(get_async_db)):
            ...
    """
    async with get_async_session_factory()() as session:
        yield session
