"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple
from uuid import UUID

from field_service.config.settings import settings
from field_service.domain.entities.audit_entry import AuditLogEntry
from field_service.domain.entities.job import Job
from field_service.domain.entities.service_history import ServiceHistoryEntry
from field_service.domain.exceptions.validation_error import (
    InvalidFormatError,
    ValidationError,
)
from field_service.domain.value_objects.job_status import JobStatus
from field_service.domain.value_objects.time_window import is_valid_date
from field_service.domain.value_objects.zone import Zone


@dataclass
class JobListQuery:
    """Filters and pagination for job listing."""

    q: Optional[str] = None
    status: Optional[JobStatus] = None
    zone: Optional[Zone] = None
    technician_id: Optional[UUID] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    page: int = 1
    page_size: int = settings.JOBS_DEFAULT_PAGE_SIZE

    def __post_init__(self):
        """Validate filters and pagination."""
        if self.status is not None:
            self.status = JobStatus(self.status)
        if self.zone is not None:
            self.zone = Zone(self.zone)

        if self.page < 1:
            raise ValidationError("page must be at least 1")
        if not 1 <= self.page_size <= settings.JOBS_MAX_PAGE_SIZE:
            raise ValidationError(
                f"page_size must be between 1 and {settings.JOBS_MAX_PAGE_SIZE}"
            )

        for name in ("from_date", "to_date"):
            value = getattr(self, name)
            if value is not None and not is_valid_date(value):
                raise InvalidFormatError(name, "YYYY-MM-DD")

        # ISO dates compare correctly as text
        if self.from_date and self.to_date and self.from_date > self.to_date:
            raise ValidationError("from_date must be on or before to_date")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        pass

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create a new job."""
        pass

    @abstractmethod
    async def update(self, job: Job) -> Job:
        """Update an existing job."""
        pass

    @abstractmethod
    async def list_active_for_technician_on_date(
        self, technician_id: UUID, scheduled_date: str
    ) -> List[Job]:
        """Get a technician's scheduled or in-progress jobs for one day."""
        pass

    @abstractmethod
    async def list_jobs(self, query: JobListQuery) -> Tuple[List[Job], int]:
        """
        List jobs matching the query.

        Returns:
            Tuple of (jobs for the requested page, total matching jobs)
        """
        pass


class ServiceHistoryRepositoryInterface(ABC):
    """Service history repository interface."""

    @abstractmethod
    async def create(self, entry: ServiceHistoryEntry) -> ServiceHistoryEntry:
        """Create a service history entry."""
        pass


class AuditLogRepositoryInterface(ABC):
    """Audit log repository interface."""

    @abstractmethod
    async def record(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Append an audit log entry."""
        pass
