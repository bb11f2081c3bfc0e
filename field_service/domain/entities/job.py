"""Job domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from field_service.domain.exceptions.job_error import (
    InvalidStatusTransitionError,
    TerminalJobError,
)
from field_service.domain.exceptions.validation_error import (
    InvalidFormatError,
    RequiredFieldError,
)
from field_service.domain.value_objects.actor import Actor
from field_service.domain.value_objects.job_status import JobStatus, can_transition
from field_service.domain.value_objects.job_window import JobWindow
from field_service.domain.value_objects.service_type import ServiceType
from field_service.domain.value_objects.time_window import (
    TimeWindow,
    is_valid_date,
    normalize_time_range,
)
from field_service.domain.value_objects.zone import Zone


@dataclass
class Job:
    """One scheduled service visit."""

    customer_id: UUID
    id: UUID = field(default_factory=uuid4)
    status: JobStatus = JobStatus.SCHEDULED
    technician_id: Optional[UUID] = None
    zone: Optional[Zone] = None
    service_type: Optional[ServiceType] = None
    scheduled_date: Optional[str] = None  # YYYY-MM-DD
    scheduled_time_start: Optional[str] = None  # HH:mm
    scheduled_time_end: Optional[str] = None  # HH:mm
    description: Optional[str] = None
    internal_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate job data."""
        if not self.customer_id:
            raise RequiredFieldError("customer_id")

        self.status = JobStatus(self.status)
        if self.zone is not None:
            self.zone = Zone(self.zone)
        if self.service_type is not None:
            self.service_type = ServiceType(self.service_type)

        if self.scheduled_date is not None and not is_valid_date(self.scheduled_date):
            raise InvalidFormatError("scheduled_date", "YYYY-MM-DD")

        # Both bounds or neither, start strictly before end
        self.scheduled_time_start, self.scheduled_time_end = normalize_time_range(
            self.scheduled_time_start, self.scheduled_time_end
        )

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = self.created_at

    @property
    def window(self) -> Optional[TimeWindow]:
        """Get the scheduled time window, if any."""
        if not self.scheduled_time_start:
            return None
        return TimeWindow(self.scheduled_time_start, self.scheduled_time_end)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal()

    def is_overdue(self, today: Optional[date] = None) -> bool:
        """Check if an active job's scheduled day is already in the past."""
        if not self.scheduled_date or self.is_terminal:
            return False
        today = today or datetime.now(timezone.utc).date()
        return date.fromisoformat(self.scheduled_date) < today

    def transition_to(self, new_status: JobStatus) -> JobStatus:
        """Move to new_status, returning the previous status."""
        new_status = JobStatus(new_status)
        if not can_transition(self.status, new_status):
            raise InvalidStatusTransitionError(self.status.value, new_status.value)

        previous = self.status
        self.status = new_status
        self._touch()
        return previous

    def assign_technician(
        self, technician_id: UUID, scheduled_date: Optional[str] = None
    ) -> None:
        """Assign a technician, optionally moving the job to another day."""
        self._ensure_not_terminal("Cannot assign technician to completed or cancelled job")
        if scheduled_date is not None:
            if not is_valid_date(scheduled_date):
                raise InvalidFormatError("scheduled_date", "YYYY-MM-DD")
            self.scheduled_date = scheduled_date
        self.technician_id = technician_id
        self._touch()

    def unassign_technician(self) -> None:
        """Remove the technician assignment."""
        self._ensure_not_terminal("Cannot modify completed or cancelled jobs")
        self.technician_id = None
        self._touch()

    def can_be_edited_by(self, actor: Actor) -> bool:
        """Terminal jobs are read-only; otherwise dispatchers or the assignee."""
        if self.is_terminal:
            return False
        return actor.can_act_on_job(self.technician_id)

    def can_be_completed_by(self, actor: Actor) -> bool:
        """Check if actor may complete this job now."""
        return self.status.can_transition_to(JobStatus.COMPLETED) and actor.can_act_on_job(
            self.technician_id
        )

    def to_window(self) -> JobWindow:
        """Project the job onto its scheduling window."""
        return JobWindow(
            id=self.id,
            technician_id=self.technician_id,
            scheduled_date=self.scheduled_date,
            start_time=self.scheduled_time_start,
            end_time=self.scheduled_time_end,
        )

    def to_dict(self) -> dict:
        """Convert job to dictionary."""
        return {
            "id": str(self.id),
            "customer_id": str(self.customer_id),
            "technician_id": str(self.technician_id) if self.technician_id else None,
            "zone": self.zone.value if self.zone else None,
            "status": self.status.value,
            "service_type": self.service_type.value if self.service_type else None,
            "scheduled_date": self.scheduled_date,
            "scheduled_time_start": self.scheduled_time_start,
            "scheduled_time_end": self.scheduled_time_end,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def _ensure_not_terminal(self, message: str) -> None:
        if self.is_terminal:
            raise TerminalJobError(message)

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
