"""ORM models. Importing this package registers every table with Base.metadata."""

from vtasker.boundary.db.models.audit_log_model import AuditLogModel
from vtasker.boundary.db.models.auth_session_model import AuthSessionModel
from vtasker.boundary.db.models.board_model import BoardMemberModel, BoardModel
from vtasker.boundary.db.models.issue_model import IssueModel, IssuePriority, IssueStatus
from vtasker.boundary.db.models.lookup_model import (
    TaskPriorityModel,
    TaskStatusModel,
    TaskTypeModel,
)
from vtasker.boundary.db.models.project_model import ProjectModel
from vtasker.boundary.db.models.task_model import (
    AcceptanceCriterionModel,
    TaskModel,
    task_dependencies,
)
from vtasker.boundary.db.models.user_model import UserModel, default_preferences

__all__ = [
    "AcceptanceCriterionModel",
    "AuditLogModel",
    "AuthSessionModel",
    "BoardMemberModel",
    "BoardModel",
    "IssueModel",
    "IssuePriority",
    "IssueStatus",
    "ProjectModel",
    "TaskModel",
    "TaskPriorityModel",
    "TaskStatusModel",
    "TaskTypeModel",
    "UserModel",
    "default_preferences",
    "task_dependencies",
]
