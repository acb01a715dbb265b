"""
Issue CRUD operations.

Provides filtered, paginated search with eager loading of the project and
assignee used to build responses.

Dependencies: sqlalchemy, vtasker.boundary.db.models
System role: Issue persistence operations
"""

from dataclasses import dataclass
from typing import Sequence
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vtasker.boundary.db.CRUD.base_crud import BaseCRUD
from vtasker.boundary.db.models.issue_model import IssueModel, IssuePriority, IssueStatus


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so text matches literally with escape="\\"."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class IssueFilters:
    """Optional filters for issue search."""

    project_id: UUID | None = None
    status: IssueStatus | None = None
    priority: IssuePriority | None = None
    assignee_id: UUID | None = None
    search: str | None = None


class IssueCRUD(BaseCRUD[IssueModel]):
    """CRUD operations for IssueModel."""

    def __init__(self) -> None:
        super().__init__(IssueModel)

    async def get_with_relations(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> IssueModel | None:
        """Retrieve a non-archived issue with project and assignee loaded."""
        stmt = (
            select(IssueModel)
            .where(IssueModel.id == id, IssueModel.is_archived.is_(False))
            .options(selectinload(IssueModel.project), selectinload(IssueModel.assignee))
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def search(
        self,
        session: AsyncSession,
        filters: IssueFilters,
        limit: int,
        offset: int = 0,
    ) -> tuple[Sequence[IssueModel], int]:
        """
        Search non-archived issues.

        search matches title or description case-insensitively; % and _
        in it are matched literally.

        Returns:
            (issues on this page newest first, total matching issues)
        """
        conditions = [IssueModel.is_archived.is_(False)]
        if filters.project_id is not None:
            conditions.append(IssueModel.project_id == filters.project_id)
        if filters.status is not None:
            conditions.append(IssueModel.status == filters.status)
        if filters.priority is not None:
            conditions.append(IssueModel.priority == filters.priority)
        if filters.assignee_id is not None:
            conditions.append(IssueModel.assignee_id == filters.assignee_id)
        if filters.search:
            pattern = f"%{escape_like(filters.search.strip())}%"
            conditions.append(
                or_(
                    IssueModel.title.ilike(pattern, escape="\\"),
                    IssueModel.description.ilike(pattern, escape="\\"),
                )
            )

        return await self.page(
            session,
            conditions,
            limit,
            offset,
            options=(selectinload(IssueModel.project), selectinload(IssueModel.assignee)),
        )


issue_crud = IssueCRUD()
