"""
Application interfaces package.
"""

from .repositories import (
    AuditLogRepositoryInterface,
    JobListQuery,
    JobRepositoryInterface,
    ServiceHistoryRepositoryInterface,
)
from .services import NotificationServiceInterface, TransactionServiceInterface

__all__ = [
    "AuditLogRepositoryInterface",
    "JobListQuery",
    "JobRepositoryInterface",
    "NotificationServiceInterface",
    "ServiceHistoryRepositoryInterface",
    "TransactionServiceInterface",
]
