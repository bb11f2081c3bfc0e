"""
Job-related API schemas.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from field_service.application.services.schedule_conflict_detector import (
    ConflictResult,
)
from field_service.domain.entities.job import Job
from field_service.domain.value_objects.job_status import JobStatus
from field_service.domain.value_objects.service_type import ServiceType
from field_service.domain.value_objects.time_window import DATE_PATTERN, TIME_PATTERN
from field_service.domain.value_objects.zone import Zone

from .common import PaginatedResponse, TimestampMixin


class JobCreateRequest(BaseModel):
    """Job creation request schema."""

    customer_id: UUID
    technician_id: Optional[UUID] = None
    zone: Optional[Zone] = None
    service_type: Optional[ServiceType] = None
    scheduled_date: Optional[str] = Field(
        None, pattern=DATE_PATTERN, description="YYYY-MM-DD"
    )
    scheduled_time_start: Optional[str] = Field(
        None, pattern=TIME_PATTERN, description="24-hour HH:mm"
    )
    scheduled_time_end: Optional[str] = Field(
        None, pattern=TIME_PATTERN, description="24-hour HH:mm"
    )
    description: Optional[str] = Field(None, max_length=2000)
    internal_notes: Optional[str] = Field(None, max_length=2000)
    status: Optional[JobStatus] = Field(
        None, description="Must be 'scheduled' if given"
    )


class JobResponse(TimestampMixin):
    """Job response schema."""

    id: UUID
    customer_id: UUID
    technician_id: Optional[UUID] = None
    zone: Optional[Zone] = None
    status: JobStatus
    service_type: Optional[ServiceType] = None
    scheduled_date: Optional[str] = None
    scheduled_time_start: Optional[str] = None
    scheduled_time_end: Optional[str] = None
    description: Optional[str] = None
    internal_notes: Optional[str] = None
    next_statuses: List[JobStatus] = Field(
        default_factory=list, description="Statuses reachable in one step"
    )

    @classmethod
    def from_entity(cls, job: Job) -> "JobResponse":
        return cls(
            id=job.id,
            customer_id=job.customer_id,
            technician_id=job.technician_id,
            zone=job.zone,
            status=job.status,
            service_type=job.service_type,
            scheduled_date=job.scheduled_date,
            scheduled_time_start=job.scheduled_time_start,
            scheduled_time_end=job.scheduled_time_end,
            description=job.description,
            internal_notes=job.internal_notes,
            next_statuses=job.status.next_statuses(),
            created_at=job.created_at,
            updated_at=job.updated_at,
        )


class ConflictWarning(BaseModel):
    """Advisory schedule conflict."""

    has_conflict: bool
    conflicting_job_id: Optional[UUID] = None
    conflicting_window: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_result(cls, result: ConflictResult) -> "ConflictWarning":
        if not result.has_conflict:
            return cls(has_conflict=False)
        return cls(
            has_conflict=True,
            conflicting_job_id=result.conflicting_job.id,
            conflicting_window=result.conflicting_job.time_display,
            message=result.message,
        )


class JobCreateResponse(BaseModel):
    """Created job plus any schedule warning."""

    job: JobResponse
    conflict: ConflictWarning


class AssignTechnicianRequestSchema(BaseModel):
    """Technician assignment request."""

    technician_id: UUID
    scheduled_date: Optional[str] = Field(None, pattern=DATE_PATTERN)


class AssignTechnicianResponse(BaseModel):
    """Assignment result plus any schedule warning."""

    job: JobResponse
    conflict: ConflictWarning
    notification_queued: bool


class StatusTransitionRequest(BaseModel):
    """Status transition request. 'from' is the status the client last saw."""

    model_config = ConfigDict(populate_by_name=True)

    to: JobStatus
    from_status: Optional[JobStatus] = Field(None, alias="from")
    notes: Optional[str] = Field(None, max_length=2000)


class StatusTransitionResponse(BaseModel):
    """Status transition result."""

    job: JobResponse
    previous_status: JobStatus
    notification_queued: bool


class CompleteJobRequestSchema(BaseModel):
    """Job completion request."""

    model_config = ConfigDict(populate_by_name=True)

    completed_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=2000)
    from_status: Optional[JobStatus] = Field(None, alias="from")


class CompleteJobResponse(BaseModel):
    """Job completion result."""

    job: JobResponse
    service_history_id: UUID
    completed_at: datetime
    notification_queued: bool


class ConflictCheckRequest(BaseModel):
    """Advisory conflict check request."""

    technician_id: Optional[UUID] = None
    scheduled_date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    exclude_job_id: Optional[UUID] = None


class JobListResponse(PaginatedResponse):
    """Paginated job list."""

    items: List[JobResponse]


class StatusOption(BaseModel):
    """Status with display metadata and allowed next statuses."""

    value: JobStatus
    label: str
    color: str
    is_terminal: bool
    next_statuses: List[JobStatus]
