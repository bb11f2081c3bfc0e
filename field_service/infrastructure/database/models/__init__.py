"""
Database models package.
"""

from .audit_log import AuditLogModel
from .base import Base, BaseModel
from .job import JobModel
from .service_history import ServiceHistoryModel

__all__ = [
    "AuditLogModel",
    "Base",
    "BaseModel",
    "JobModel",
    "ServiceHistoryModel",
]
