"""
Job status changed domain event.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from field_service.domain.value_objects.job_status import JobStatus


@dataclass
class JobStatusChanged:
    """Event raised when a job moves along its lifecycle."""

    job_id: UUID
    from_status: JobStatus
    to_status: JobStatus
    changed_by: UUID
    changed_at: datetime
    notes: Optional[str] = None

    def to_audit_meta(self) -> dict:
        """Convert event to audit log metadata."""
        meta = {
            "from": JobStatus(self.from_status).value,
            "to": JobStatus(self.to_status).value,
            "changed_at": self.changed_at.isoformat(),
        }
        if self.notes:
            meta["notes"] = self.notes
        return meta
