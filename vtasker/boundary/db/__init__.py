"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin, ArchivableMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management

Dependencies: sqlalchemy, vtasker.configs
System role: Database adapter for users, sessions, projects, issues, boards and tasks
"""

from vtasker.boundary.db.base import ArchivableMixin, Base, TimestampMixin, UUIDMixin, as_utc, utcnow
from vtasker.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)

__all__ = [
    "ArchivableMixin",
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "as_utc",
    "utcnow",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
