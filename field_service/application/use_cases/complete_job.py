"""Complete job use case."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from field_service.application.interfaces.repositories import (
    AuditLogRepositoryInterface,
    JobRepositoryInterface,
    ServiceHistoryRepositoryInterface,
)
from field_service.application.interfaces.services import (
    NotificationServiceInterface,
    TransactionServiceInterface,
)
from field_service.application.use_cases.transition_status import (
    ensure_expected_status,
    load_job_for_actor,
)
from field_service.config.logging import get_logger
from field_service.config.settings import settings
from field_service.domain.entities.audit_entry import AuditAction, AuditLogEntry
from field_service.domain.entities.job import Job
from field_service.domain.entities.service_history import ServiceHistoryEntry
from field_service.domain.events.job_status_changed import JobStatusChanged
from field_service.domain.exceptions.job_error import (
    InvalidStatusTransitionError,
    JobCompletionError,
)
from field_service.domain.value_objects.actor import Actor
from field_service.domain.value_objects.job_status import JobStatus, can_transition
from field_service.domain.value_objects.notification_kind import NotificationKind
from field_service.infrastructure.monitoring.metrics import record_status_transition

logger = get_logger(__name__)


@dataclass
class CompleteJobRequest:
    """Request for completing a job."""

    actor: Actor
    job_id: UUID
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    expected_status: Optional[JobStatus] = None


@dataclass
class CompleteJobResult:
    """Result of job completion."""

    job: Job
    service_history: ServiceHistoryEntry
    notification_queued: bool = False


class CompleteJobUseCase:
    """Use case for completing a job and recording its service history."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        service_history_repo: ServiceHistoryRepositoryInterface,
        audit_repo: AuditLogRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        notification_service: NotificationServiceInterface,
    ):
        self.job_repo = job_repo
        self.service_history_repo = service_history_repo
        self.audit_repo = audit_repo
        self.transaction_service = transaction_service
        self.notification_service = notification_service

    async def execute(self, request: CompleteJobRequest) -> CompleteJobResult:
        """
        Complete an in-progress job.

        The status update and the service history insert are committed
        together. If the history insert fails, the status change is rolled
        back and JobCompletionError is raised.
        """
        job = await load_job_for_actor(self.job_repo, request.actor, request.job_id)
        ensure_expected_status(job, request.expected_status)

        from_status = job.status
        if not can_transition(from_status, JobStatus.COMPLETED):
            record_status_transition(
                from_status.value, JobStatus.COMPLETED.value, "rejected"
            )
            raise InvalidStatusTransitionError(
                from_status.value, JobStatus.COMPLETED.value
            )

        job.transition_to(JobStatus.COMPLETED)
        updated_job = await self.job_repo.update(job)

        try:
            history = await self.service_history_repo.create(
                ServiceHistoryEntry.for_job(
                    updated_job, completed_at=request.completed_at, notes=request.notes
                )
            )
        except Exception as e:
            logger.error(
                "Failed to record service history, reverting completion",
                job_id=str(job.id),
                error=str(e),
                exc_info=True,
            )
            await self._revert()
            raise JobCompletionError(
                f"Failed to record service history for job {job.id}"
            ) from e

        event = JobStatusChanged(
            job_id=updated_job.id,
            from_status=from_status,
            to_status=JobStatus.COMPLETED,
            changed_by=request.actor.user_id,
            changed_at=history.completed_at,
            notes=request.notes,
        )

        try:
            meta = event.to_audit_meta()
            meta["service_history_id"] = str(history.id)
            await self.audit_repo.record(
                AuditLogEntry(
                    actor_id=request.actor.user_id,
                    action=AuditAction.COMPLETE_JOB,
                    entity_id=updated_job.id,
                    meta=meta,
                )
            )
            await self.transaction_service.commit()
        except Exception as e:
            logger.error(
                "Failed to commit job completion, rolling back",
                job_id=str(job.id),
                error=str(e),
                exc_info=True,
            )
            await self.transaction_service.rollback()
            raise

        record_status_transition(from_status.value, JobStatus.COMPLETED.value, "success")
        logger.info(
            "Job completed",
            job_id=str(updated_job.id),
            completed_by=str(request.actor.user_id),
            service_history_id=str(history.id),
        )

        queued = await self.notification_service.notify_job(
            updated_job,
            NotificationKind.COMPLETION,
            extra={"feedback_url": f"{settings.APP_URL}/feedback/{updated_job.id}"},
        )

        return CompleteJobResult(
            job=updated_job, service_history=history, notification_queued=queued
        )

    async def _revert(self) -> None:
        # Best effort; the insert failure is what gets reported
        try:
            await self.transaction_service.rollback()
        except Exception as e:
            logger.error("Rollback after failed completion also failed", error=str(e))
