"""
Unit tests for notification queueing and delivery.
"""

import json
import threading
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import structlog

from field_service.background.tasks.notifications import send_job_notification_task
from field_service.config.settings import settings
from field_service.domain.value_objects.notification_kind import NotificationKind
from field_service.infrastructure.notifications.http_client import NotificationClient
from field_service.infrastructure.notifications.notification_service import (
    CeleryNotificationService,
    build_notification_payload,
)

TASK_PATH = "field_service.infrastructure.notifications.notification_service.send_job_notification_task"


class TestBuildNotificationPayload:
    """Test payload construction."""

    def test_payload_fields(self, make_job):
        job = make_job()
        payload = build_notification_payload(
            job, NotificationKind.ON_THE_WAY, extra={"eta_minutes": 20}
        )

        assert payload["kind"] == "on_the_way"
        assert payload["job_id"] == str(job.id)
        assert payload["technician_id"] == str(job.technician_id)
        assert payload["window"] == "13:00 - 15:00"
        assert payload["eta_minutes"] == 20

    def test_unassigned_job(self, make_job):
        payload = build_notification_payload(
            make_job(technician_id=None), NotificationKind.APPOINTMENT_CONFIRMATION
        )
        assert payload["technician_id"] is None


class TestCeleryNotificationService:
    """Test CeleryNotificationService."""

    @pytest.mark.asyncio
    async def test_queues_task(self, make_job):
        job = make_job()
        service = CeleryNotificationService(enabled=True)

        with patch(TASK_PATH) as mock_task:
            queued = await service.notify_job(job, NotificationKind.COMPLETION)

        assert queued is True
        payload = mock_task.delay.call_args.args[0]
        assert payload["kind"] == "completion"
        assert payload["job_id"] == str(job.id)

    @pytest.mark.asyncio
    async def test_disabled_does_not_queue(self, make_job):
        service = CeleryNotificationService(enabled=False)

        with patch(TASK_PATH) as mock_task:
            queued = await service.notify_job(make_job(), NotificationKind.COMPLETION)

        assert queued is False
        mock_task.delay.assert_not_called()

    @pytest.mark.asyncio
    async def test_broker_failure_returns_false(self, make_job):
        service = CeleryNotificationService(enabled=True)

        with patch(TASK_PATH) as mock_task:
            mock_task.delay.side_effect = ConnectionError("broker unreachable")
            queued = await service.notify_job(make_job(), NotificationKind.ON_THE_WAY)

        assert queued is False

    @pytest.mark.asyncio
    async def test_publishes_off_the_event_loop_thread(self, make_job):
        service = CeleryNotificationService(enabled=True)
        loop_thread = threading.get_ident()
        publish_threads = []

        with patch(TASK_PATH) as mock_task:
            mock_task.delay.side_effect = lambda payload: publish_threads.append(
                threading.get_ident()
            )
            queued = await service.notify_job(make_job(), NotificationKind.COMPLETION)

        assert queued is True
        assert len(publish_threads) == 1
        assert publish_threads[0] != loop_thread


class TestNotificationClient:
    """Test the provider HTTP client."""

    @pytest.mark.asyncio
    async def test_send_posts_payload(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(202, json={"id": "msg-1"})

        async with NotificationClient(
            base_url="http://notify.test/api",
            api_key="secret",
            transport=httpx.MockTransport(handler),
        ) as client:
            result = await client.send({"kind": "completion", "job_id": "j1"})

        assert result == {"id": "msg-1"}
        assert seen["path"] == "/api/notifications"
        assert seen["auth"] == "Bearer secret"
        assert seen["body"]["kind"] == "completion"

    @pytest.mark.asyncio
    async def test_send_raises_on_error_status(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))

        async with NotificationClient(
            base_url="http://notify.test/api", transport=transport
        ) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.send({"kind": "completion", "job_id": "j1"})


class TestSendJobNotificationTask:
    """Test the Celery delivery task run in-process."""

    DELIVER_PATH = "field_service.background.tasks.notifications.deliver_notification"

    def test_successful_delivery(self):
        with patch(self.DELIVER_PATH, new=AsyncMock(return_value={"id": "msg-1"})):
            result = send_job_notification_task.apply(
                args=({"kind": "completion", "job_id": "j1"},)
            )

        assert result.successful()
        assert result.get() == {"id": "msg-1"}

    def test_gives_up_after_max_retries(self):
        deliver = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with patch(self.DELIVER_PATH, new=deliver):
            with pytest.raises(httpx.ConnectError):
                send_job_notification_task.apply(
                    args=({"kind": "on_the_way", "job_id": "j1"},)
                )

        assert deliver.call_count == settings.NOTIFICATION_MAX_RETRIES + 1

    def test_log_context_cleared_after_delivery(self):
        with patch(self.DELIVER_PATH, new=AsyncMock(return_value={"id": "msg-1"})):
            send_job_notification_task.apply(args=({"kind": "completion", "job_id": "j1"},))

        context = structlog.contextvars.get_contextvars()
        assert "task_id" not in context
        assert "job_id" not in context

    def test_log_context_cleared_after_failure(self):
        deliver = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with patch(self.DELIVER_PATH, new=deliver):
            with pytest.raises(httpx.ConnectError):
                send_job_notification_task.apply(
                    args=({"kind": "on_the_way", "job_id": "j1"},)
                )

        context = structlog.contextvars.get_contextvars()
        assert "task_id" not in context
        assert "job_id" not in context
