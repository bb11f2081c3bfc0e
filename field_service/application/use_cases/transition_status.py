"""Transition job status use case."""

from dataclasses import dataclass
from datetime import datetime, timezone
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
from field_service.config.logging import get_logger
from field_service.domain.entities.audit_entry import AuditAction, AuditLogEntry
from field_service.domain.entities.job import Job
from field_service.domain.events.job_status_changed import JobStatusChanged
from field_service.domain.exceptions.job_error import (
    InvalidStatusTransitionError,
    JobNotFoundError,
    JobPermissionError,
    JobStatusConflictError,
)
from field_service.domain.exceptions.validation_error import ValidationError
from field_service.domain.value_objects.actor import Actor
from field_service.domain.value_objects.job_status import JobStatus, can_transition
from field_service.domain.value_objects.notification_kind import NotificationKind
from field_service.infrastructure.monitoring.metrics import record_status_transition

logger = get_logger(__name__)


@dataclass
class TransitionStatusRequest:
    """Request for moving a job to a new status."""

    actor: Actor
    job_id: UUID
    to_status: JobStatus
    expected_status: Optional[JobStatus] = None
    notes: Optional[str] = None


@dataclass
class TransitionStatusResult:
    """Result of a status transition."""

    job: Job
    event: JobStatusChanged
    notification_queued: bool = False


async def load_job_for_actor(
    job_repo: JobRepositoryInterface, actor: Actor, job_id: UUID
) -> Job:
    """Load a job the actor is allowed to change."""
    job = await job_repo.get_by_id(job_id)
    if not job:
        raise JobNotFoundError(job_id)

    if not actor.can_act_on_job(job.technician_id):
        raise JobPermissionError("Technicians can only update their own jobs")
    return job


def ensure_expected_status(job: Job, expected_status: Optional[JobStatus]) -> None:
    """Reject a request made against a stale view of the job."""
    if expected_status is None:
        return
    expected = JobStatus(expected_status)
    if expected != job.status:
        raise JobStatusConflictError(job.id, expected.value, job.status.value)


class TransitionStatusUseCase:
    """Use case for validated job status changes."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        audit_repo: AuditLogRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        notification_service: NotificationServiceInterface,
    ):
        self.job_repo = job_repo
        self.audit_repo = audit_repo
        self.transaction_service = transaction_service
        self.notification_service = notification_service

    async def execute(self, request: TransitionStatusRequest) -> TransitionStatusResult:
        """
        Move a job to request.to_status.

        Raises:
            JobNotFoundError: Job does not exist
            JobPermissionError: Technician acting on another technician's job
            JobStatusConflictError: expected_status no longer matches
            ValidationError: to_status is completed; use CompleteJobUseCase
            InvalidStatusTransitionError: Edge not in the transition table
        """
        to_status = JobStatus(request.to_status)
        job = await load_job_for_actor(self.job_repo, request.actor, request.job_id)
        ensure_expected_status(job, request.expected_status)

        # Completion also writes service history
        if to_status == JobStatus.COMPLETED:
            raise ValidationError(
                "Jobs are completed through the complete endpoint, not a transition"
            )

        from_status = job.status
        if not can_transition(from_status, to_status):
            record_status_transition(from_status.value, to_status.value, "rejected")
            logger.warning(
                "Rejected status transition",
                job_id=str(job.id),
                from_status=from_status.value,
                to_status=to_status.value,
                actor_id=str(request.actor.user_id),
            )
            raise InvalidStatusTransitionError(from_status.value, to_status.value)

        job.transition_to(to_status)
        event = JobStatusChanged(
            job_id=job.id,
            from_status=from_status,
            to_status=to_status,
            changed_by=request.actor.user_id,
            changed_at=job.updated_at or datetime.now(timezone.utc),
            notes=request.notes,
        )

        try:
            updated_job = await self.job_repo.update(job)
            await self.audit_repo.record(
                AuditLogEntry(
                    actor_id=request.actor.user_id,
                    action=AuditAction.STATUS_TRANSITION,
                    entity_id=updated_job.id,
                    meta=event.to_audit_meta(),
                )
            )
            await self.transaction_service.commit()
        except Exception as e:
            logger.error(
                "Failed to persist status transition, rolling back",
                job_id=str(job.id),
                error=str(e),
                exc_info=True,
            )
            await self.transaction_service.rollback()
            raise

        record_status_transition(from_status.value, to_status.value, "success")
        logger.info(
            "Job status changed",
            job_id=str(updated_job.id),
            from_status=from_status.value,
            to_status=to_status.value,
            changed_by=str(request.actor.user_id),
        )

        queued = False
        if to_status == JobStatus.IN_PROGRESS:
            queued = await self.notification_service.notify_job(
                updated_job, NotificationKind.ON_THE_WAY
            )

        return TransitionStatusResult(
            job=updated_job, event=event, notification_queued=queued
        )
