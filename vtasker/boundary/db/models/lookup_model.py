"""
Task lookup tables.

Statuses, priorities and types are small integer-keyed tables seeded at
schema creation.

Dependencies: sqlalchemy, vtasker.boundary.db.base
System role: Reference data for tasks
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vtasker.boundary.db.base import Base


class LookupMixin:
    """Common columns for lookup tables."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class TaskStatusModel(Base, LookupMixin):
    __tablename__ = "task_statuses"


class TaskPriorityModel(Base, LookupMixin):
    __tablename__ = "task_priorities"


class TaskTypeModel(Base, LookupMixin):
    __tablename__ = "task_types"


DEFAULT_TASK_STATUSES = [
    {"id": 1, "code": "todo", "name": "To Do", "display_order": 1},
    {"id": 2, "code": "in_progress", "name": "In Progress", "display_order": 2},
    {"id": 3, "code": "in_review", "name": "In Review", "display_order": 3},
    {"id": 4, "code": "done", "name": "Done", "display_order": 4},
]

DEFAULT_TASK_PRIORITIES = [
    {"id": 1, "code": "low", "name": "Low", "display_order": 1},
    {"id": 2, "code": "medium", "name": "Medium", "display_order": 2},
    {"id": 3, "code": "high", "name": "High", "display_order": 3},
]

DEFAULT_TASK_TYPES = [
    {"id": 1, "code": "feature", "name": "Feature", "display_order": 1},
    {"id": 2, "code": "bug", "name": "Bug", "display_order": 2},
    {"id": 3, "code": "docs", "name": "Documentation", "display_order": 3},
    {"id": 4, "code": "chore", "name": "Chore", "display_order": 4},
]
