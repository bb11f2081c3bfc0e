"""Check schedule conflict use case."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from field_service.application.interfaces.repositories import JobRepositoryInterface
from field_service.application.services.schedule_conflict_detector import (
    NO_CONFLICT,
    ConflictResult,
    ScheduleConflictDetector,
)
from field_service.config.logging import get_logger
from field_service.domain.exceptions.validation_error import InvalidFormatError
from field_service.domain.value_objects.job_window import JobWindow
from field_service.domain.value_objects.time_window import (
    is_valid_date,
    normalize_time_range,
)

logger = get_logger(__name__)


@dataclass
class CheckScheduleConflictRequest:
    """Request for an advisory schedule conflict check."""

    technician_id: Optional[UUID] = None
    scheduled_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    exclude_job_id: Optional[UUID] = None


class CheckScheduleConflictUseCase:
    """Use case for checking a proposed window against a technician's day."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        conflict_detector: Optional[ScheduleConflictDetector] = None,
    ):
        self.job_repo = job_repo
        self.conflict_detector = conflict_detector or ScheduleConflictDetector()

    async def execute(self, request: CheckScheduleConflictRequest) -> ConflictResult:
        """Return the first conflicting job, if any. Never blocks scheduling."""
        if not (
            request.technician_id
            and request.scheduled_date
            and request.start_time
            and request.end_time
        ):
            return NO_CONFLICT

        if not is_valid_date(request.scheduled_date):
            raise InvalidFormatError("scheduled_date", "YYYY-MM-DD")
        normalize_time_range(request.start_time, request.end_time)

        existing = await self.job_repo.list_active_for_technician_on_date(
            request.technician_id, request.scheduled_date
        )

        candidate = JobWindow(
            id=request.exclude_job_id,
            technician_id=request.technician_id,
            scheduled_date=request.scheduled_date,
            start_time=request.start_time,
            end_time=request.end_time,
        )

        logger.debug(
            "Checking schedule conflict",
            technician_id=str(request.technician_id),
            scheduled_date=request.scheduled_date,
            existing_jobs=len(existing),
        )

        return self.conflict_detector.check(
            [job.to_window() for job in existing],
            candidate,
            exclude_job_id=request.exclude_job_id,
        )
