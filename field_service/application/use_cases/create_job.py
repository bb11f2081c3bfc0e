"""Create job use case."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from field_service.application.interfaces.repositories import (
    AuditLogRepositoryInterface,
    JobRepositoryInterface,
)
from field_service.application.interfaces.services import (
    TransactionServiceInterface,
)
from field_service.application.services.schedule_conflict_detector import (
    NO_CONFLICT,
    ConflictResult,
    ScheduleConflictDetector,
)
from field_service.config.logging import get_logger
from field_service.domain.entities.audit_entry import AuditAction, AuditLogEntry
from field_service.domain.entities.job import Job
from field_service.domain.exceptions.job_error import JobPermissionError
from field_service.domain.exceptions.validation_error import ValidationError
from field_service.domain.value_objects.actor import Actor
from field_service.domain.value_objects.job_status import JobStatus
from field_service.infrastructure.monitoring.metrics import record_job_creation

logger = get_logger(__name__)


@dataclass
class CreateJobRequest:
    """Request for creating a job."""

    actor: Actor
    customer_id: UUID
    technician_id: Optional[UUID] = None
    zone: Optional[str] = None
    service_type: Optional[str] = None
    scheduled_date: Optional[str] = None
    scheduled_time_start: Optional[str] = None
    scheduled_time_end: Optional[str] = None
    description: Optional[str] = None
    internal_notes: Optional[str] = None
    status: Optional[JobStatus] = None


@dataclass
class CreateJobResult:
    """Result of job creation."""

    job: Job
    conflict: ConflictResult


class CreateJobUseCase:
    """Use case for creating a scheduled job."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        audit_repo: AuditLogRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        conflict_detector: Optional[ScheduleConflictDetector] = None,
    ):
        self.job_repo = job_repo
        self.audit_repo = audit_repo
        self.transaction_service = transaction_service
        self.conflict_detector = conflict_detector or ScheduleConflictDetector()

    async def execute(self, request: CreateJobRequest) -> CreateJobResult:
        """Create a job. Schedule conflicts are reported, not enforced."""
        if not request.actor.is_dispatcher:
            raise JobPermissionError("Only dispatchers and admins can create jobs")

        # New jobs always enter the lifecycle at its start
        if request.status is not None and JobStatus(request.status) != JobStatus.SCHEDULED:
            raise ValidationError("New jobs must start with status 'scheduled'")

        job = Job(
            customer_id=request.customer_id,
            technician_id=request.technician_id,
            zone=request.zone,
            service_type=request.service_type,
            scheduled_date=request.scheduled_date,
            scheduled_time_start=request.scheduled_time_start,
            scheduled_time_end=request.scheduled_time_end,
            description=request.description,
            internal_notes=request.internal_notes,
        )

        conflict = await self._check_conflict(job)

        try:
            created_job = await self.job_repo.create(job)
            await self.audit_repo.record(
                AuditLogEntry(
                    actor_id=request.actor.user_id,
                    action=AuditAction.CREATE,
                    entity_id=created_job.id,
                    meta={
                        "customer_id": str(created_job.customer_id),
                        "technician_id": (
                            str(created_job.technician_id)
                            if created_job.technician_id
                            else None
                        ),
                        "scheduled_date": created_job.scheduled_date,
                        "schedule_conflict": conflict.has_conflict,
                    },
                )
            )
            await self.transaction_service.commit()
        except Exception as e:
            logger.error(
                "Failed to create job, rolling back",
                customer_id=str(request.customer_id),
                error=str(e),
                exc_info=True,
            )
            await self.transaction_service.rollback()
            raise

        record_job_creation(
            created_job.zone.value if created_job.zone else None, conflict.has_conflict
        )
        logger.info(
            "Job created",
            job_id=str(created_job.id),
            created_by=str(request.actor.user_id),
            technician_id=str(created_job.technician_id),
            scheduled_date=created_job.scheduled_date,
            schedule_conflict=conflict.has_conflict,
        )

        return CreateJobResult(job=created_job, conflict=conflict)

    async def _check_conflict(self, job: Job) -> ConflictResult:
        if not (job.technician_id and job.scheduled_date and job.window):
            return NO_CONFLICT

        existing = await self.job_repo.list_active_for_technician_on_date(
            job.technician_id, job.scheduled_date
        )
        return self.conflict_detector.check(
            [j.to_window() for j in existing], job.to_window(), exclude_job_id=job.id
        )
