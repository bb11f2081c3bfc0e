"""Service history repository implementation."""

from sqlalchemy.ext.asyncio import AsyncSession

from field_service.application.interfaces.repositories import (
    ServiceHistoryRepositoryInterface,
)
from field_service.domain.entities.service_history import ServiceHistoryEntry
from field_service.infrastructure.database.models.service_history import (
    ServiceHistoryModel,
)


class ServiceHistoryRepository(ServiceHistoryRepositoryInterface):
    """Service history repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, entry: ServiceHistoryEntry) -> ServiceHistoryEntry:
        """Create a service history entry."""
        model = ServiceHistoryModel(
            id=entry.id,
            job_id=entry.job_id,
            customer_id=entry.customer_id,
            technician_id=entry.technician_id,
            completed_at=entry.completed_at,
            notes=entry.notes,
            created_at=entry.created_at,
        )
        self.db.add(model)
        await self.db.flush()

        return ServiceHistoryEntry(
            id=model.id,
            job_id=model.job_id,
            customer_id=model.customer_id,
            technician_id=model.technician_id,
            completed_at=model.completed_at,
            notes=model.notes,
            created_at=model.created_at,
        )
