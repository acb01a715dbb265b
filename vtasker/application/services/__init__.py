"""Service orchestrators."""

from .auth_service import AuthService, CurrentUser
from .board_service import BoardService
from .issue_service import IssueService
from .project_service import ProjectService
from .task_service import TaskService
from .user_service import UserService

__all__ = [
    "AuthService",
    "BoardService",
    "CurrentUser",
    "IssueService",
    "ProjectService",
    "TaskService",
    "UserService",
]
