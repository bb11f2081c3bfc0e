"""
API schemas package.
"""

from .common import ErrorResponse, PaginatedResponse
from .job import (
    AssignTechnicianRequestSchema,
    AssignTechnicianResponse,
    CompleteJobRequestSchema,
    CompleteJobResponse,
    ConflictCheckRequest,
    ConflictWarning,
    JobCreateRequest,
    JobCreateResponse,
    JobListResponse,
    JobResponse,
    StatusOption,
    StatusTransitionRequest,
    StatusTransitionResponse,
)

__all__ = [
    "AssignTechnicianRequestSchema",
    "AssignTechnicianResponse",
    "CompleteJobRequestSchema",
    "CompleteJobResponse",
    "ConflictCheckRequest",
    "ConflictWarning",
    "ErrorResponse",
    "JobCreateRequest",
    "JobCreateResponse",
    "JobListResponse",
    "JobResponse",
    "PaginatedResponse",
    "StatusOption",
    "StatusTransitionRequest",
    "StatusTransitionResponse",
]
