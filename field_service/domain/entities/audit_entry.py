"""
Audit log entity.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID, uuid4


class AuditAction(str, Enum):
    """Audited job actions."""

    CREATE = "CREATE"
    ASSIGN_TECHNICIAN = "ASSIGN_TECHNICIAN"
    UNASSIGN_TECHNICIAN = "UNASSIGN_TECHNICIAN"
    STATUS_TRANSITION = "STATUS_TRANSITION"
    COMPLETE_JOB = "COMPLETE_JOB"


@dataclass
class AuditLogEntry:
    """Who did what to which job, and when."""

    actor_id: UUID
    action: AuditAction
    entity_id: UUID
    entity: str = "job"
    id: UUID = field(default_factory=uuid4)
    meta: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def __post_init__(self):
        self.action = AuditAction(self.action)
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
