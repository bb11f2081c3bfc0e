"""
Domain package.
"""

from .entities import *
from .events import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "AuditAction",
    "AuditLogEntry",
    "Job",
    "ServiceHistoryEntry",

    # Events
    "JobStatusChanged",

    # Exceptions
    "InvalidStatusTransitionError",
    "JobError",
    "JobNotFoundError",
    "ValidationError",

    # Value Objects
    "Actor",
    "JobStatus",
    "JobWindow",
    "TimeWindow",
    "UserRole",
    "can_transition",
    "get_next_statuses",
]
