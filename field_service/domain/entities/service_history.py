"""
Service history entity: the permanent record of a completed visit.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from field_service.domain.exceptions.validation_error import RequiredFieldError


@dataclass
class ServiceHistoryEntry:
    """Completed job record kept per customer."""

    job_id: UUID
    customer_id: UUID
    id: UUID = field(default_factory=uuid4)
    technician_id: Optional[UUID] = None
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate entry and initialize timestamps."""
        if not self.job_id:
            raise RequiredFieldError("job_id")
        if not self.customer_id:
            raise RequiredFieldError("customer_id")

        if not self.completed_at:
            self.completed_at = datetime.now(timezone.utc)
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)

    @classmethod
    def for_job(
        cls,
        job,
        completed_at: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> "ServiceHistoryEntry":
        """Build the history entry for a job being completed."""
        return cls(
            job_id=job.id,
            customer_id=job.customer_id,
            technician_id=job.technician_id,
            completed_at=completed_at,
            notes=notes,
        )
