"""
HTTP client for the customer notification provider.
"""

import time
from typing import Any, Dict, Optional

import httpx

from field_service.config.logging import get_logger
from field_service.config.settings import settings

logger = get_logger(__name__)


class NotificationClient:
    """Async client posting job notifications to the provider API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.NOTIFICATION_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.NOTIFICATION_API_KEY
        self.timeout = timeout or settings.NOTIFICATION_TIMEOUT
        self.transport = transport
        self.client = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.aclose()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def send(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Post one notification.

        Raises:
            httpx.HTTPError: Transport failure or non-2xx response
        """
        start_time = time.time()

        try:
            response = await self.client.post("/notifications", json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(
                "Notification request failed",
                job_id=payload.get("job_id"),
                kind=payload.get("kind"),
                error=str(e),
                response_time_ms=(time.time() - start_time) * 1000,
            )
            raise

        logger.debug(
            "Notification request completed",
            job_id=payload.get("job_id"),
            kind=payload.get("kind"),
            status_code=response.status_code,
            response_time_ms=(time.time() - start_time) * 1000,
        )

        return response.json() if response.content else {}
