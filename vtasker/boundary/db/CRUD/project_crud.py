"""
Project CRUD operations.

Provides paginated listing of active projects and per-project issue
counters.

Dependencies: sqlalchemy, vtasker.boundary.db.models
System role: Project persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.boundary.db.CRUD.base_crud import BaseCRUD
from vtasker.boundary.db.models.issue_model import IssueModel, IssueStatus
from vtasker.boundary.db.models.project_model import ProjectModel


class ProjectCRUD(BaseCRUD[ProjectModel]):
    """CRUD operations for ProjectModel."""

    def __init__(self) -> None:
        super().__init__(ProjectModel)

    async def list_active(
        self,
        session: AsyncSession,
        limit: int,
        offset: int = 0,
    ) -> tuple[Sequence[ProjectModel], int]:
        """
        Retrieve non-archived projects, newest first.

        Args:
            session: Async database session
            limit: Page size
            offset: Rows to skip

        Returns:
            (projects on this page, total non-archived projects)
        """
        return await self.page(session, [ProjectModel.is_archived.is_(False)], limit, offset)

    async def issue_counts(
        self,
        session: AsyncSession,
        project_ids: list[UUID],
    ) -> dict[UUID, tuple[int, int]]:
        """
        Count non-archived issues per project.

        Returns:
            Mapping project_id -> (issue_count, open_issue_count), where open
            means any status other than done. Projects without issues are
            absent from the mapping.
        """
        if not project_ids:
            return {}
        open_case = case((IssueModel.status != IssueStatus.DONE, 1), else_=0)
        stmt = (
            select(
                IssueModel.project_id,
                func.count(IssueModel.id),
                func.coalesce(func.sum(open_case), 0),
            )
            .where(
                IssueModel.project_id.in_(project_ids),
                IssueModel.is_archived.is_(False),
            )
            .group_by(IssueModel.project_id)
        )
        result = await session.execute(stmt)
        return {row[0]: (int(row[1]), int(row[2])) for row in result.all()}


project_crud = ProjectCRUD()
