"""
Domain exceptions package.
"""

from .job_error import (
    InvalidStatusTransitionError,
    JobCompletionError,
    JobError,
    JobNotFoundError,
    JobPermissionError,
    JobStatusConflictError,
    TerminalJobError,
)
from .validation_error import (
    InvalidFormatError,
    InvalidTimeRangeError,
    RequiredFieldError,
    ValidationError,
)

__all__ = [
    "InvalidFormatError",
    "InvalidStatusTransitionError",
    "InvalidTimeRangeError",
    "JobCompletionError",
    "JobError",
    "JobNotFoundError",
    "JobPermissionError",
    "JobStatusConflictError",
    "RequiredFieldError",
    "TerminalJobError",
    "ValidationError",
]
