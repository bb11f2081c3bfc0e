"""
Celery tasks for customer job notifications.
"""

import asyncio
from typing import Any, Dict

import httpx

from field_service.background.celery_app import celery_app
from field_service.config.logging import (
    bind_log_context,
    clear_log_context,
    get_logger,
)
from field_service.config.settings import settings
from field_service.infrastructure.monitoring.metrics import (
    record_notification_delivery,
)
from field_service.infrastructure.notifications.http_client import NotificationClient

logger = get_logger(__name__)


def run_async_in_new_loop(coro):
    """
    Run an async coroutine in a new event loop.

    Each task invocation gets its own loop so prefork workers never share one.
    """
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        return loop.run_until_complete(coro)
    finally:
        asyncio.set_event_loop(None)
        loop.close()


async def deliver_notification(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Post a notification payload to the provider."""
    async with NotificationClient() as client:
        return await client.send(payload)


@celery_app.task(
    bind=True,
    name="send_job_notification_task",
    max_retries=settings.NOTIFICATION_MAX_RETRIES,
    queue="notifications",
)
def send_job_notification_task(self, payload: Dict[str, Any]):
    """
    Deliver one customer notification, retrying HTTP failures with backoff.
    """
    kind = payload.get("kind", "unknown")
    bind_log_context(task_id=self.request.id, job_id=payload.get("job_id"))
    try:
        logger.info(
            "Sending job notification",
            kind=kind,
            attempt=self.request.retries + 1,
        )

        try:
            result = run_async_in_new_loop(deliver_notification(payload))
        except httpx.HTTPError as e:
            if self.request.retries >= self.max_retries:
                record_notification_delivery(kind, "failed")
                logger.error(
                    "Job notification failed permanently",
                    job_id=payload.get("job_id"),
                    kind=kind,
                    error=str(e),
                )
                raise

            record_notification_delivery(kind, "retry")
            countdown = settings.NOTIFICATION_RETRY_BACKOFF_SECONDS * (
                2 ** self.request.retries
            )
            raise self.retry(exc=e, countdown=countdown)

        record_notification_delivery(kind, "sent")
        logger.info("Job notification sent", job_id=payload.get("job_id"), kind=kind)
        return result
    finally:
        # Worker processes are reused across tasks
        clear_log_context()
