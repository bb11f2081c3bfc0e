"""
Job lifecycle domain exceptions.
"""

from uuid import UUID


class JobError(Exception):
    """Base exception for job lifecycle errors."""

    pass


class JobNotFoundError(JobError):
    """Raised when a job does not exist."""

    def __init__(self, job_id: UUID):
        self.job_id = job_id
        super().__init__(f"Job {job_id} not found")


class JobPermissionError(JobError):
    """Raised when the acting user may not operate on a job."""

    pass


class InvalidStatusTransitionError(JobError):
    """Raised when a status change is not in the transition table."""

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid status transition from {from_status} to {to_status}"
        )


class JobStatusConflictError(JobError):
    """Raised when the caller's view of the job status is stale."""

    def __init__(self, job_id: UUID, expected_status: str, actual_status: str):
        self.job_id = job_id
        self.expected_status = expected_status
        self.actual_status = actual_status
        super().__init__(
            f"Job {job_id} is '{actual_status}', expected '{expected_status}'"
        )


class TerminalJobError(JobError):
    """Raised when modifying a completed or cancelled job."""

    pass


class JobCompletionError(JobError):
    """Raised when completion side records could not be written."""

    pass
