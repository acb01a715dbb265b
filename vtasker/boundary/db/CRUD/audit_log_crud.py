"""
Audit log CRUD operations.

Dependencies: sqlalchemy, vtasker.boundary.db.models
System role: Audit trail persistence
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vtasker.boundary.db.CRUD.base_crud import BaseCRUD
from vtasker.boundary.db.models.audit_log_model import AuditLogModel


class AuditLogCRUD(BaseCRUD[AuditLogModel]):
    """CRUD operations for AuditLogModel."""

    def __init__(self) -> None:
        super().__init__(AuditLogModel)

    async def list_for_entity(
        self,
        session: AsyncSession,
        entity_id: UUID,
    ) -> Sequence[AuditLogModel]:
        """Entries for one entity, oldest first."""
        stmt = (
            select(AuditLogModel)
            .where(AuditLogModel.entity_id == entity_id)
            .order_by(AuditLogModel.created_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


audit_log_crud = AuditLogCRUD()
