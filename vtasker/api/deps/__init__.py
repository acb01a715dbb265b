"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_auth_service,
    get_board_service,
    get_current_user,
    get_issue_service,
    get_project_service,
    get_task_service,
    get_user_service,
)

__all__ = [
    "get_auth_service",
    "get_board_service",
    "get_current_user",
    "get_issue_service",
    "get_project_service",
    "get_task_service",
    "get_user_service",
]
