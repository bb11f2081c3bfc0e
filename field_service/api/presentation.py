"""
Status display metadata for dashboard clients.

Kept apart from the transition table in the domain layer; changing a label
or colour never changes which transitions are legal.
"""

from typing import Any, Dict, List

from field_service.domain.value_objects.job_status import JobStatus, get_next_statuses

STATUS_LABELS: Dict[JobStatus, str] = {
    JobStatus.SCHEDULED: "Scheduled",
    JobStatus.IN_PROGRESS: "In Progress",
    JobStatus.COMPLETED: "Completed",
    JobStatus.CANCELLED: "Cancelled",
}

STATUS_COLORS: Dict[JobStatus, str] = {
    JobStatus.SCHEDULED: "blue",
    JobStatus.IN_PROGRESS: "yellow",
    JobStatus.COMPLETED: "green",
    JobStatus.CANCELLED: "red",
}


def status_label(status: JobStatus) -> str:
    return STATUS_LABELS.get(JobStatus(status), str(status))


def status_color(status: JobStatus) -> str:
    return STATUS_COLORS.get(JobStatus(status), "gray")


def status_options() -> List[Dict[str, Any]]:
    """Describe every status with its label, colour and next statuses."""
    return [
        {
            "value": status.value,
            "label": status_label(status),
            "color": status_color(status),
            "is_terminal": status.is_terminal(),
            "next_statuses": [s.value for s in get_next_statuses(status)],
        }
        for status in JobStatus
    ]
