"""Job repository implementation."""

from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from field_service.application.interfaces.repositories import (
    JobListQuery,
    JobRepositoryInterface,
)
from field_service.config.logging import get_logger
from field_service.domain.entities.job import Job
from field_service.domain.exceptions.job_error import JobNotFoundError
from field_service.domain.value_objects.job_status import ACTIVE_STATUSES
from field_service.infrastructure.database.models.job import JobModel

logger = get_logger(__name__)


LIKE_ESCAPE = "\\"


def _to_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _escape_like(text: str) -> str:
    """Match % and _ in search text literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class JobRepository(JobRepositoryInterface):
    """Job repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        stmt = select(JobModel).where(JobModel.id == job_id)
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def create(self, job: Job) -> Job:
        """Create a new job."""
        job_model = JobModel(id=job.id, created_at=job.created_at)
        self._apply(job_model, job)

        self.db.add(job_model)
        # Flush only; the transaction service owns the commit
        await self.db.flush()
        await self.db.refresh(job_model)

        return self._model_to_entity(job_model)

    async def update(self, job: Job) -> Job:
        """Update an existing job."""
        stmt = select(JobModel).where(JobModel.id == job.id)
        result = await self.db.execute(stmt)
        job_model = result.scalar_one_or_none()

        if not job_model:
            raise JobNotFoundError(job.id)

        self._apply(job_model, job)

        await self.db.flush()
        await self.db.refresh(job_model)

        return self._model_to_entity(job_model)

    async def list_active_for_technician_on_date(
        self, technician_id: UUID, scheduled_date: str
    ) -> List[Job]:
        """Get a technician's scheduled or in-progress jobs for one day."""
        stmt = (
            select(JobModel)
            .where(
                JobModel.technician_id == technician_id,
                JobModel.scheduled_date == _to_date(scheduled_date),
                JobModel.status.in_([status.value for status in ACTIVE_STATUSES]),
            )
            .order_by(JobModel.scheduled_time_start)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def list_jobs(self, query: JobListQuery) -> Tuple[List[Job], int]:
        """List jobs matching the query, ordered by date then start time."""
        stmt = select(JobModel)

        if query.q:
            pattern = f"%{_escape_like(query.q)}%"
            stmt = stmt.where(
                or_(
                    JobModel.description.ilike(pattern, escape=LIKE_ESCAPE),
                    JobModel.service_type.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        if query.status:
            stmt = stmt.where(JobModel.status == query.status.value)
        if query.zone:
            stmt = stmt.where(JobModel.zone == query.zone.value)
        if query.technician_id:
            stmt = stmt.where(JobModel.technician_id == query.technician_id)
        if query.from_date:
            stmt = stmt.where(JobModel.scheduled_date >= _to_date(query.from_date))
        if query.to_date:
            stmt = stmt.where(JobModel.scheduled_date <= _to_date(query.to_date))

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.db.execute(count_stmt)).scalar_one()

        stmt = (
            stmt.order_by(
                JobModel.scheduled_date.asc().nulls_last(),
                JobModel.scheduled_time_start.asc().nulls_last(),
                JobModel.created_at.asc(),
            )
            .offset(query.offset)
            .limit(query.page_size)
        )
        result = await self.db.execute(stmt)
        jobs = [self._model_to_entity(model) for model in result.scalars().all()]

        logger.debug(
            "Listed jobs", total=total, page=query.page, page_size=query.page_size
        )
        return jobs, total

    def _apply(self, model: JobModel, job: Job) -> None:
        model.customer_id = job.customer_id
        model.technician_id = job.technician_id
        model.zone = job.zone.value if job.zone else None
        model.status = job.status.value
        model.service_type = job.service_type.value if job.service_type else None
        model.scheduled_date = _to_date(job.scheduled_date)
        model.scheduled_time_start = job.scheduled_time_start
        model.scheduled_time_end = job.scheduled_time_end
        model.description = job.description
        model.internal_notes = job.internal_notes
        model.updated_at = job.updated_at

    def _model_to_entity(self, model: JobModel) -> Job:
        """Convert SQLAlchemy model to domain entity."""
        return Job(
            id=model.id,
            customer_id=model.customer_id,
            technician_id=model.technician_id,
            zone=model.zone,
            status=model.status,
            service_type=model.service_type,
            scheduled_date=(
                model.scheduled_date.isoformat() if model.scheduled_date else None
            ),
            scheduled_time_start=model.scheduled_time_start,
            scheduled_time_end=model.scheduled_time_end,
            description=model.description,
            internal_notes=model.internal_notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
