"""
Notification service that hands job notifications to Celery.
"""

import asyncio
from typing import Any, Dict, Optional

from field_service.application.interfaces.services import (
    NotificationServiceInterface,
)
from field_service.background.tasks.notifications import send_job_notification_task
from field_service.config.logging import get_logger
from field_service.config.settings import settings
from field_service.domain.entities.job import Job
from field_service.domain.value_objects.notification_kind import NotificationKind
from field_service.infrastructure.monitoring.metrics import (
    record_notification_enqueued,
)

logger = get_logger(__name__)


def build_notification_payload(
    job: Job, kind: NotificationKind, extra: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Build the JSON payload sent to the notification provider."""
    payload = {
        "kind": NotificationKind(kind).value,
        "job_id": str(job.id),
        "customer_id": str(job.customer_id),
        "technician_id": str(job.technician_id) if job.technician_id else None,
        "status": job.status.value,
        "service_type": job.service_type.value if job.service_type else None,
        "scheduled_date": job.scheduled_date,
        "window": job.window.display if job.window else None,
    }
    if extra:
        payload.update(extra)
    return payload


class CeleryNotificationService(NotificationServiceInterface):
    """Queues notifications; delivery happens in a Celery worker."""

    def __init__(self, enabled: Optional[bool] = None):
        self.enabled = settings.NOTIFICATIONS_ENABLED if enabled is None else enabled

    async def notify_job(
        self,
        job: Job,
        kind: NotificationKind,
        extra: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Queue a notification. Failures are logged, never raised."""
        kind = NotificationKind(kind)

        if not self.enabled:
            logger.debug("Notifications disabled", job_id=str(job.id), kind=kind.value)
            record_notification_enqueued(kind.value, "disabled")
            return False

        payload = build_notification_payload(job, kind, extra)
        try:
            # Publishing to the broker is blocking I/O
            await asyncio.to_thread(send_job_notification_task.delay, payload)
        except Exception as e:
            # Reported to the caller as False
            logger.error(
                "Failed to queue notification",
                job_id=str(job.id),
                kind=kind.value,
                error=str(e),
            )
            record_notification_enqueued(kind.value, "failed")
            return False

        record_notification_enqueued(kind.value, "queued")
        logger.info("Notification queued", job_id=str(job.id), kind=kind.value)
        return True
