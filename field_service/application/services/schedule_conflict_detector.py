"""
Schedule conflict detection for technician time windows.

A technician should not hold two active jobs whose windows overlap on the
same day. Windows are half-open, so ``09:00-10:00`` followed by
``10:00-11:00`` is back-to-back, not a conflict. Callers pass only the
technician's active jobs for the candidate's date; this module does not
filter by technician, date or status itself.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional
from uuid import UUID

from field_service.config.logging import get_logger
from field_service.domain.value_objects.job_window import JobWindow
from field_service.domain.value_objects.time_window import (
    intervals_overlap,
    parse_time_to_minutes,
)
from field_service.infrastructure.monitoring.metrics import record_conflict_check

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConflictResult:
    """Conflict check outcome."""

    has_conflict: bool
    conflicting_job: Optional[JobWindow] = None

    @property
    def message(self) -> Optional[str]:
        """Get a human-readable warning, if there is a conflict."""
        if not self.has_conflict or self.conflicting_job is None:
            return None
        return (
            "Technician already has a job scheduled at "
            f"{self.conflicting_job.time_display}"
        )


NO_CONFLICT = ConflictResult(has_conflict=False)


def find_time_conflicts(
    existing_jobs: Iterable[JobWindow],
    candidate: JobWindow,
    exclude_job_id: Optional[UUID] = None,
) -> List[JobWindow]:
    """
    Find every existing job whose window overlaps the candidate's.

    Args:
        existing_jobs: Active jobs for the same technician and date
        candidate: Window being scheduled
        exclude_job_id: Job to ignore, normally the one being rescheduled

    Returns:
        Overlapping jobs in input order; empty if the candidate has no window
    """
    if not candidate.has_time_window:
        return []

    start = parse_time_to_minutes(candidate.start_time, "start_time")
    end = parse_time_to_minutes(candidate.end_time, "end_time")

    conflicts = []
    for job in existing_jobs:
        if exclude_job_id is not None and job.id == exclude_job_id:
            continue
        if not job.has_time_window:
            continue

        job_start = parse_time_to_minutes(job.start_time, "start_time")
        job_end = parse_time_to_minutes(job.end_time, "end_time")
        if intervals_overlap(start, end, job_start, job_end):
            conflicts.append(job)

    return conflicts


def check_time_conflict(
    existing_jobs: Iterable[JobWindow],
    candidate: JobWindow,
    exclude_job_id: Optional[UUID] = None,
) -> ConflictResult:
    """Report the first existing job overlapping the candidate, if any."""
    if not candidate.has_time_window:
        return NO_CONFLICT

    conflicts = find_time_conflicts(existing_jobs, candidate, exclude_job_id)
    if not conflicts:
        return NO_CONFLICT
    return ConflictResult(has_conflict=True, conflicting_job=conflicts[0])


class ScheduleConflictDetector:
    """Advisory double-booking check for technician schedules."""

    def __init__(self):
        self.logger = logger

    def check(
        self,
        existing_jobs: Iterable[JobWindow],
        candidate: JobWindow,
        exclude_job_id: Optional[UUID] = None,
    ) -> ConflictResult:
        """Check candidate against existing jobs and log the outcome."""
        result = check_time_conflict(existing_jobs, candidate, exclude_job_id)
        record_conflict_check(result.has_conflict)

        if result.has_conflict:
            self.logger.info(
                "Schedule conflict detected",
                technician_id=str(candidate.technician_id),
                scheduled_date=candidate.scheduled_date,
                window=candidate.time_display,
                conflicting_job_id=str(result.conflicting_job.id),
                conflicting_window=result.conflicting_job.time_display,
            )
        else:
            self.logger.debug(
                "No schedule conflict",
                technician_id=str(candidate.technician_id),
                scheduled_date=candidate.scheduled_date,
            )

        return result
