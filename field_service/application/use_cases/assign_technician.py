"""Assign and unassign technician use cases."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from field_service.application.interfaces.repositories import (
    AuditLogRepositoryInterface,
    JobRepositoryInterface,
)
from field_service.application.interfaces.services import (
    NotificationServiceInterface,
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
from field_service.domain.exceptions.job_error import (
    JobNotFoundError,
    JobPermissionError,
)
from field_service.domain.value_objects.actor import Actor
from field_service.domain.value_objects.notification_kind import NotificationKind
from field_service.infrastructure.monitoring.metrics import (
    record_technician_assignment,
)

logger = get_logger(__name__)


@dataclass
class AssignTechnicianRequest:
    """Request for assigning a technician to a job."""

    actor: Actor
    job_id: UUID
    technician_id: UUID
    scheduled_date: Optional[str] = None


@dataclass
class AssignTechnicianResult:
    """Result of technician assignment."""

    job: Job
    conflict: ConflictResult
    notification_queued: bool = False


@dataclass
class UnassignTechnicianRequest:
    """Request for removing a job's technician."""

    actor: Actor
    job_id: UUID


async def _load_job_for_dispatch(
    job_repo: JobRepositoryInterface, actor: Actor, job_id: UUID
) -> Job:
    if not actor.is_dispatcher:
        raise JobPermissionError("Only dispatchers and admins can assign technicians")

    job = await job_repo.get_by_id(job_id)
    if not job:
        raise JobNotFoundError(job_id)
    return job


class AssignTechnicianUseCase:
    """Use case for assigning a technician, with an advisory conflict check."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        audit_repo: AuditLogRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        notification_service: NotificationServiceInterface,
        conflict_detector: Optional[ScheduleConflictDetector] = None,
    ):
        self.job_repo = job_repo
        self.audit_repo = audit_repo
        self.transaction_service = transaction_service
        self.notification_service = notification_service
        self.conflict_detector = conflict_detector or ScheduleConflictDetector()

    async def execute(self, request: AssignTechnicianRequest) -> AssignTechnicianResult:
        """Assign the technician and queue an appointment confirmation."""
        job = await _load_job_for_dispatch(self.job_repo, request.actor, request.job_id)

        previous_technician_id = job.technician_id
        job.assign_technician(request.technician_id, request.scheduled_date)

        conflict = await self._check_conflict(job)

        try:
            updated_job = await self.job_repo.update(job)
            await self.audit_repo.record(
                AuditLogEntry(
                    actor_id=request.actor.user_id,
                    action=AuditAction.ASSIGN_TECHNICIAN,
                    entity_id=updated_job.id,
                    meta={
                        "technician_id": str(request.technician_id),
                        "previous_technician_id": (
                            str(previous_technician_id)
                            if previous_technician_id
                            else None
                        ),
                        "scheduled_date": updated_job.scheduled_date,
                        "schedule_conflict": conflict.has_conflict,
                    },
                )
            )
            await self.transaction_service.commit()
        except Exception as e:
            logger.error(
                "Failed to assign technician, rolling back",
                job_id=str(request.job_id),
                error=str(e),
                exc_info=True,
            )
            await self.transaction_service.rollback()
            raise

        record_technician_assignment("assign", conflict.has_conflict)
        logger.info(
            "Technician assigned",
            job_id=str(updated_job.id),
            technician_id=str(request.technician_id),
            assigned_by=str(request.actor.user_id),
            schedule_conflict=conflict.has_conflict,
        )

        queued = await self.notification_service.notify_job(
            updated_job, NotificationKind.APPOINTMENT_CONFIRMATION
        )

        return AssignTechnicianResult(
            job=updated_job, conflict=conflict, notification_queued=queued
        )

    async def _check_conflict(self, job: Job) -> ConflictResult:
        if not (job.scheduled_date and job.window):
            return NO_CONFLICT

        existing = await self.job_repo.list_active_for_technician_on_date(
            job.technician_id, job.scheduled_date
        )
        return self.conflict_detector.check(
            [j.to_window() for j in existing], job.to_window(), exclude_job_id=job.id
        )


class UnassignTechnicianUseCase:
    """Use case for clearing a job's technician."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        audit_repo: AuditLogRepositoryInterface,
        transaction_service: TransactionServiceInterface,
    ):
        self.job_repo = job_repo
        self.audit_repo = audit_repo
        self.transaction_service = transaction_service

    async def execute(self, request: UnassignTechnicianRequest) -> Job:
        job = await _load_job_for_dispatch(self.job_repo, request.actor, request.job_id)

        previous_technician_id = job.technician_id
        job.unassign_technician()

        try:
            updated_job = await self.job_repo.update(job)
            await self.audit_repo.record(
                AuditLogEntry(
                    actor_id=request.actor.user_id,
                    action=AuditAction.UNASSIGN_TECHNICIAN,
                    entity_id=updated_job.id,
                    meta={
                        "previous_technician_id": (
                            str(previous_technician_id)
                            if previous_technician_id
                            else None
                        )
                    },
                )
            )
            await self.transaction_service.commit()
        except Exception as e:
            logger.error(
                "Failed to unassign technician, rolling back",
                job_id=str(request.job_id),
                error=str(e),
                exc_info=True,
            )
            await self.transaction_service.rollback()
            raise

        record_technician_assignment("unassign")
        logger.info(
            "Technician unassigned",
            job_id=str(updated_job.id),
            previous_technician_id=str(previous_technician_id),
        )
        return updated_job
