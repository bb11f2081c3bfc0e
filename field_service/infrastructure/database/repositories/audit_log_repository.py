"""Audit log repository implementation."""

from sqlalchemy.ext.asyncio import AsyncSession

from field_service.application.interfaces.repositories import (
    AuditLogRepositoryInterface,
)
from field_service.config.logging import get_logger
from field_service.domain.entities.audit_entry import AuditLogEntry
from field_service.infrastructure.database.models.audit_log import AuditLogModel

logger = get_logger(__name__)


class AuditLogRepository(AuditLogRepositoryInterface):
    """Audit log repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Append an audit log entry."""
        self.db.add(
            AuditLogModel(
                id=entry.id,
                actor_id=entry.actor_id,
                action=entry.action.value,
                entity=entry.entity,
                entity_id=entry.entity_id,
                meta=entry.meta,
                created_at=entry.created_at,
            )
        )
        await self.db.flush()

        logger.debug(
            "Audit entry recorded",
            action=entry.action.value,
            entity=entry.entity,
            entity_id=str(entry.entity_id),
        )
        return entry
