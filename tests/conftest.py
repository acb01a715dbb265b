"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory database session, seeded users, mocked services,
authenticated caller overrides
Dependencies: pytest, sqlalchemy, fastapi
System role: Test infrastructure and fixture management
"""

import os
import uuid
from unittest.mock import AsyncMock

import pytest

# Settings are cached on first use; configure them before vtasker is imported.
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("AUTH_BCRYPT_ROUNDS", "4")
os.environ.setdefault("POSTGRES_URL", "sqlite+aiosqlite://")


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Session over freshly created and seeded tables
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from vtasker.boundary.db.create_tables import create_all_tables, drop_all_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    await create_all_tables(engine)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    await drop_all_tables(engine)

    await engine.dispose()


async def _make_user(session, email: str, name: str):
    from vtasker.boundary.db.CRUD.user_crud import user_crud
    from vtasker.core.security import hash_password

    user = await user_crud.create(
        session,
        email=email,
        password_hash=hash_password("password123", rounds=4),
        name=name,
    )
    await session.commit()
    return user


@pytest.fixture
async def owner(test_async_db):
    """Persisted user who owns boards in service tests."""
    return await _make_user(test_async_db, "owner@example.com", "Olivia Owner")


@pytest.fixture
async def other_user(test_async_db):
    """Second persisted user with no access by default."""
    return await _make_user(test_async_db, "other@example.com", "Omar Other")


@pytest.fixture
def current_user():
    """Authenticated caller returned by the get_current_user override."""
    from vtasker.application.services.auth_service import CurrentUser

    return CurrentUser(id=uuid.uuid4(), email="caller@example.com", session_id=uuid.uuid4())


@pytest.fixture
def client(current_user):
    """
    TestClient for the API with authentication overridden.

    Yields:
        TestClient: Client whose requests authenticate as current_user
    """
    from fastapi.testclient import TestClient

    from vtasker.api.deps.dependencies import get_current_user
    from vtasker.api.main import create_app

    app = create_app()
    app.dependency_overrides[get_current_user] = lambda: current_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_service():
    """Bare AsyncMock standing in for any service."""
    return AsyncMock()
