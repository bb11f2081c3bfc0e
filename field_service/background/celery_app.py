"""
Celery application configuration and setup.
"""

from celery import Celery
from celery.signals import setup_logging

from field_service.config.logging import configure_logging
from field_service.config.settings import settings

celery_app = Celery(
    "field_service",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["field_service.background.tasks.notifications"],
)

celery_app.conf.update(
    task_routes={
        "send_job_notification_task": {"queue": "notifications"},
    },
    # Worker configuration
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    worker_hijack_root_logger=False,
    # Task configuration
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
    task_eager_propagates=True,
    task_ignore_result=True,
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_default_queue="default",
    # Task time limits
    task_soft_time_limit=settings.CELERY_TASK_SOFT_TIME_LIMIT,
    task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
    task_acks_late=True,
)


@setup_logging.connect
def configure_worker_logging(**kwargs):
    """Use structlog in workers instead of Celery's own logging setup."""
    configure_logging()


if __name__ == "__main__":
    celery_app.start()
