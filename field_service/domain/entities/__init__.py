"""
Domain entities package.
"""

from .audit_entry import AuditAction, AuditLogEntry
from .job import Job
from .service_history import ServiceHistoryEntry

__all__ = [
    "AuditAction",
    "AuditLogEntry",
    "Job",
    "ServiceHistoryEntry",
]
