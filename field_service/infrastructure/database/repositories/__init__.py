"""
Database repositories package.
"""

from .audit_log_repository import AuditLogRepository
from .job_repository import JobRepository
from .service_history_repository import ServiceHistoryRepository
from .transaction_repository import TransactionService

__all__ = [
    "AuditLogRepository",
    "JobRepository",
    "ServiceHistoryRepository",
    "TransactionService",
]
