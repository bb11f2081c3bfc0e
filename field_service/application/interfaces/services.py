"""
Service interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from field_service.domain.entities.job import Job
from field_service.domain.value_objects.notification_kind import NotificationKind


class NotificationServiceInterface(ABC):
    """Interface for customer notification delivery."""

    @abstractmethod
    async def notify_job(
        self,
        job: Job,
        kind: NotificationKind,
        extra: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Queue a customer notification about a job.

        Returns:
            True if the notification was queued. Implementations must not
            raise for delivery problems.
        """
        pass


class TransactionServiceInterface(ABC):
    """Interface for unit-of-work commit and rollback."""

    @abstractmethod
    async def commit(self) -> None:
        """Commit pending changes."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard pending changes."""
        pass
