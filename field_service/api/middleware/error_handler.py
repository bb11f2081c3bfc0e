"""
Error handling middleware.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from field_service.config.logging import get_logger
from field_service.domain.exceptions.job_error import (
    InvalidStatusTransitionError,
    JobCompletionError,
    JobError,
    JobNotFoundError,
    JobPermissionError,
    JobStatusConflictError,
    TerminalJobError,
)
from field_service.domain.exceptions.validation_error import ValidationError
from field_service.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)


def _error(status_code: int, error: str, message: str, type_: str, details=None):
    content = {"error": error, "message": message, "type": type_}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


class ErrorHandlerMiddleware:
    """Registers domain exception handlers on a FastAPI app."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_error_handlers()

    def add_error_handlers(self) -> None:
        """Add custom error handlers to FastAPI app."""
        add_error_handlers(self.app)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return _error(400, "Validation Error", str(exc), "validation_error")

    @app.exception_handler(JobPermissionError)
    async def permission_error_handler(request: Request, exc: JobPermissionError):
        logger.warning("Permission denied", error=str(exc), path=request.url.path)
        return _error(403, "Forbidden", str(exc), "permission_error")

    @app.exception_handler(JobNotFoundError)
    async def not_found_handler(request: Request, exc: JobNotFoundError):
        return _error(404, "Not Found", str(exc), "not_found")

    @app.exception_handler(InvalidStatusTransitionError)
    async def invalid_transition_handler(
        request: Request, exc: InvalidStatusTransitionError
    ):
        return _error(
            409,
            "Invalid Status Transition",
            str(exc),
            "invalid_transition",
            {"from": exc.from_status, "to": exc.to_status},
        )

    @app.exception_handler(JobStatusConflictError)
    async def status_conflict_handler(request: Request, exc: JobStatusConflictError):
        return _error(
            409,
            "Status Conflict",
            str(exc),
            "status_conflict",
            {"expected": exc.expected_status, "current": exc.actual_status},
        )

    @app.exception_handler(TerminalJobError)
    async def terminal_job_handler(request: Request, exc: TerminalJobError):
        return _error(409, "Job Closed", str(exc), "terminal_job")

    @app.exception_handler(JobCompletionError)
    async def completion_error_handler(request: Request, exc: JobCompletionError):
        record_error("JobCompletionError", "complete_job")
        logger.error("Job completion failed", error=str(exc), path=request.url.path)
        return _error(500, "Completion Failed", str(exc), "completion_error")

    @app.exception_handler(JobError)
    async def job_error_handler(request: Request, exc: JobError):
        logger.warning("Job error", error=str(exc), path=request.url.path)
        return _error(400, "Job Error", str(exc), "job_error")

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        record_error(type(exc).__name__, "database")
        logger.error("Database error", error=str(exc), path=request.url.path)
        return _error(500, "Database Error", "A database error occurred", "database_error")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTP Error",
                "message": exc.detail,
                "type": "http_error",
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        record_error(type(exc).__name__, "api")
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        return _error(
            500, "Internal Server Error", "An unexpected error occurred", "internal_error"
        )
