"""
Issue service orchestrator.

Coordinates issue creation, filtered search and soft deletion.

Dependencies: vtasker.boundary.db.CRUD
System role: Issue use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.boundary.db.CRUD.issue_crud import IssueFilters, issue_crud
from vtasker.boundary.db.CRUD.project_crud import project_crud
from vtasker.boundary.db.CRUD.user_crud import user_crud
from vtasker.boundary.db.models.issue_model import IssueModel, IssuePriority, IssueStatus
from vtasker.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Fields a PUT/PATCH may change
_UPDATABLE = ("title", "description", "priority", "status", "assignee_id")
_NULLABLE = ("description", "assignee_id")


def issue_to_dict(issue: IssueModel) -> dict:
    return {
        "id": issue.id,
        "title": issue.title,
        "description": issue.description,
        "status": issue.status,
        "priority": issue.priority,
        "project_id": issue.project_id,
        "project_name": issue.project.name if issue.project else None,
        "assignee_id": issue.assignee_id,
        "assignee_name": issue.assignee.name if issue.assignee else None,
        "created_by": issue.created_by,
        "created_at": issue.created_at,
        "updated_at": issue.updated_at,
    }


class IssueService:
    """Issue service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize issue service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _check_assignee(self, assignee_id: UUID | None) -> None:
        if assignee_id is not None and not await user_crud.exists(self.db, assignee_id):
            raise ValidationError("invalid user", field="assignee_id")

    async def create_issue(
        self,
        title: str,
        priority: IssuePriority,
        project_id: UUID,
        created_by: UUID | None,
        description: str | None = None,
        status: IssueStatus = IssueStatus.TODO,
        assignee_id: UUID | None = None,
    ) -> dict:
        """
        Create an issue in a project.

        Raises:
            ValidationError: Missing project ("invalid project") or assignee
                ("invalid user")
        """
        project = await project_crud.get_by_id(self.db, project_id)
        if project is None or project.is_archived:
            raise ValidationError("invalid project", field="project_id")
        await self._check_assignee(assignee_id)

        try:
            issue = await issue_crud.create(
                self.db,
                title=title.strip(),
                description=description,
                status=status,
                priority=priority,
                project_id=project_id,
                assignee_id=assignee_id,
                created_by=created_by,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to create issue",
                extra={"error": str(e), "project_id": str(project_id)},
            )
            raise

        logger.info(
            "Issue created",
            extra={"issue_id": str(issue.id), "project_id": str(project_id)},
        )
        return await self.get_issue(issue.id)

    async def get_issue(self, issue_id: UUID) -> dict:
        """
        Get a non-archived issue with project and assignee names.

        Raises:
            NotFoundError: Missing or archived
        """
        issue = await issue_crud.get_with_relations(self.db, issue_id)
        if issue is None:
            raise NotFoundError("issue", issue_id)
        return issue_to_dict(issue)

    async def list_issues(self, filters: IssueFilters, page: int, page_size: int) -> dict:
        """
        Filtered page of issues.

        Returns:
            dict: {"items", "total", "page", "page_size", "total_pages"}
        """
        issues, total = await issue_crud.search(
            self.db, filters, limit=page_size, offset=(page - 1) * page_size
        )
        return {
            "items": [issue_to_dict(i) for i in issues],
            "total": total,
            "page": page,
            "page_size": page_size,
            "total_pages": (total + page_size - 1) // page_size,
        }

    async def update_issue(self, issue_id: UUID, changes: dict) -> dict:
        """
        Partial update. Keys absent from changes are left as they are.

        Raises:
            NotFoundError: Missing or archived
            ValidationError: Unknown assignee
        """
        issue = await issue_crud.get_with_relations(self.db, issue_id)
        if issue is None:
            raise NotFoundError("issue", issue_id)

        fields = {
            k: v
            for k, v in changes.items()
            if k in _UPDATABLE and (v is not None or k in _NULLABLE)
        }
        if "assignee_id" in fields:
            await self._check_assignee(fields["assignee_id"])
        if fields.get("title") is not None:
            fields["title"] = fields["title"].strip()

        try:
            for key, value in fields.items():
                setattr(issue, key, value)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to update issue", extra={"error": str(e), "issue_id": str(issue_id)})
            raise

        logger.info("Issue updated", extra={"issue_id": str(issue_id), "fields": sorted(fields)})
        return await self.get_issue(issue_id)

    async def archive_issue(self, issue_id: UUID) -> None:
        """Soft-delete an issue."""
        issue = await issue_crud.get_with_relations(self.db, issue_id)
        if issue is None:
            raise NotFoundError("issue", issue_id)
        issue.is_archived = True
        await self.db.commit()
        logger.info("Issue archived", extra={"issue_id": str(issue_id)})
