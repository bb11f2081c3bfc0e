"""
Request/Response logging middleware.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response

from field_service.config.logging import (
    bind_log_context,
    clear_log_context,
    get_logger,
)
from field_service.infrastructure.monitoring.metrics import record_api_request

logger = get_logger(__name__)


class LoggingMiddleware:
    """Request/Response logging middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_logging_middleware()

    def add_logging_middleware(self) -> None:
        """Add request/response logging middleware."""

        @self.app.middleware("http")
        async def logging_middleware(request: Request, call_next: Callable) -> Response:
            request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
            start_time = time.time()

            clear_log_context()
            bind_log_context(
                request_id=request_id, user_id=request.headers.get("x-user-id")
            )
            logger.info(
                "Request started",
                method=request.method,
                path=request.url.path,
                query_params=str(request.query_params),
            )

            request.state.request_id = request_id

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "Request failed",
                    method=request.method,
                    path=request.url.path,
                    error=str(e),
                    process_time=f"{time.time() - start_time:.4f}s",
                )
                raise

            process_time = time.time() - start_time
            route = request.scope.get("route")
            endpoint = getattr(route, "path", request.url.path)
            record_api_request(request.method, endpoint, response.status_code, process_time)

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time=f"{process_time:.4f}s",
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"
            return response
