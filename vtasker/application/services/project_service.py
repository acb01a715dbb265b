"""
Project service orchestrator.

Coordinates project lifecycle operations and issue counters.

Dependencies: vtasker.boundary.db.CRUD
System role: Project use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.boundary.db.CRUD.project_crud import project_crud
from vtasker.boundary.db.models.project_model import ProjectModel
from vtasker.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def project_to_dict(project: ProjectModel, counts: tuple[int, int] = (0, 0)) -> dict:
    return {
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "created_by": project.created_by,
        "is_archived": project.is_archived,
        "issue_count": counts[0],
        "open_issue_count": counts[1],
        "created_at": project.created_at,
        "updated_at": project.updated_at,
    }


class ProjectService:
    """Project service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize project service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create_project(
        self,
        name: str,
        description: str | None,
        created_by: UUID | None,
    ) -> dict:
        """
        Create a project.

        Returns:
            dict: Project with zero issue counters
        """
        try:
            project = await project_crud.create(
                self.db,
                name=name.strip(),
                description=description,
                created_by=created_by,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to create project", extra={"error": str(e), "project_name": name})
            raise

        logger.info(
            "Project created",
            extra={"project_id": str(project.id), "project_name": project.name},
        )
        return project_to_dict(project)

    async def _get_active(self, project_id: UUID) -> ProjectModel:
        project = await project_crud.get_by_id(self.db, project_id)
        if project is None or project.is_archived:
            raise NotFoundError("project", project_id)
        return project

    async def get_project(self, project_id: UUID) -> dict:
        """
        Get a non-archived project with its issue counters.

        Raises:
            NotFoundError: Missing or archived
        """
        project = await self._get_active(project_id)
        counts = await project_crud.issue_counts(self.db, [project.id])
        return project_to_dict(project, counts.get(project.id, (0, 0)))

    async def list_projects(self, page: int, page_size: int) -> dict:
        """
        Page through non-archived projects, newest first.

        Returns:
            dict: {"projects", "total", "page", "page_size"}
        """
        projects, total = await project_crud.list_active(
            self.db, limit=page_size, offset=(page - 1) * page_size
        )
        counts = await project_crud.issue_counts(self.db, [p.id for p in projects])
        return {
            "projects": [project_to_dict(p, counts.get(p.id, (0, 0))) for p in projects],
            "total": total,
            "page": page,
            "page_size": page_size,
        }

    async def update_project(self, project_id: UUID, **changes) -> dict:
        """
        Update name, description or archive flag.

        None values are ignored.
        """
        await self._get_active(project_id)
        fields = {k: v for k, v in changes.items() if v is not None}
        try:
            project = await project_crud.update_by_id(self.db, project_id, **fields)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to update project",
                extra={"error": str(e), "project_id": str(project_id)},
            )
            raise

        counts = await project_crud.issue_counts(self.db, [project.id])
        logger.info("Project updated", extra={"project_id": str(project_id), "fields": sorted(fields)})
        return project_to_dict(project, counts.get(project.id, (0, 0)))

    async def archive_project(self, project_id: UUID) -> None:
        """Soft-delete a project by archiving it."""
        project = await self._get_active(project_id)
        project.is_archived = True
        await self.db.commit()
        logger.info("Project archived", extra={"project_id": str(project_id)})
