"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from vtasker.boundary.db.CRUD import user_crud, project_crud

    user = await user_crud.get_by_email(db, "a@example.com")
"""

from vtasker.boundary.db.CRUD.audit_log_crud import AuditLogCRUD, audit_log_crud
from vtasker.boundary.db.CRUD.auth_session_crud import AuthSessionCRUD, auth_session_crud
from vtasker.boundary.db.CRUD.base_crud import BaseCRUD
from vtasker.boundary.db.CRUD.board_crud import BoardCRUD, board_crud, board_member_crud
from vtasker.boundary.db.CRUD.issue_crud import IssueCRUD, IssueFilters, issue_crud
from vtasker.boundary.db.CRUD.lookup_crud import (
    LookupCRUD,
    seed_lookups,
    task_priority_crud,
    task_status_crud,
    task_type_crud,
)
from vtasker.boundary.db.CRUD.project_crud import ProjectCRUD, project_crud
from vtasker.boundary.db.CRUD.task_crud import TaskCRUD, criterion_crud, task_crud
from vtasker.boundary.db.CRUD.user_crud import UserCRUD, user_crud

__all__ = [
    "BaseCRUD",
    "AuditLogCRUD",
    "AuthSessionCRUD",
    "BoardCRUD",
    "IssueCRUD",
    "IssueFilters",
    "LookupCRUD",
    "ProjectCRUD",
    "TaskCRUD",
    "UserCRUD",
    "audit_log_crud",
    "auth_session_crud",
    "board_crud",
    "board_member_crud",
    "criterion_crud",
    "issue_crud",
    "project_crud",
    "seed_lookups",
    "task_crud",
    "task_priority_crud",
    "task_status_crud",
    "task_type_crud",
    "user_crud",
]
