"""
Job status value object and lifecycle transition table.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Union


class JobStatus(str, Enum):
    """Job lifecycle status enumeration."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def is_terminal(self) -> bool:
        """Check if status is terminal (no further transitions)."""
        return self in [JobStatus.COMPLETED, JobStatus.CANCELLED]

    def is_active(self) -> bool:
        """Check if status still counts against a technician's schedule."""
        return self in [JobStatus.SCHEDULED, JobStatus.IN_PROGRESS]

    def can_transition_to(self, target: "JobStatus") -> bool:
        """Check if moving from this status to target is allowed."""
        return can_transition(self, target)

    def next_statuses(self) -> List["JobStatus"]:
        """Get statuses reachable in one step."""
        return get_next_statuses(self)


ALLOWED_TRANSITIONS: Dict[JobStatus, FrozenSet[JobStatus]] = {
    JobStatus.SCHEDULED: frozenset({JobStatus.IN_PROGRESS, JobStatus.CANCELLED}),
    JobStatus.IN_PROGRESS: frozenset({JobStatus.COMPLETED, JobStatus.CANCELLED}),
    JobStatus.COMPLETED: frozenset(),
    JobStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES: FrozenSet[JobStatus] = frozenset(
    {JobStatus.COMPLETED, JobStatus.CANCELLED}
)
ACTIVE_STATUSES: FrozenSet[JobStatus] = frozenset(
    {JobStatus.SCHEDULED, JobStatus.IN_PROGRESS}
)


def can_transition(
    from_status: Union[JobStatus, str], to_status: Union[JobStatus, str]
) -> bool:
    """
    Check if a job may move from one status to another.

    Same-status requests are never legal. Terminal statuses have no
    outgoing edges.
    """
    return JobStatus(to_status) in ALLOWED_TRANSITIONS[JobStatus(from_status)]


def get_next_statuses(current: Union[JobStatus, str]) -> List[JobStatus]:
    """Get all statuses reachable from current, in declaration order."""
    allowed = ALLOWED_TRANSITIONS[JobStatus(current)]
    return [status for status in JobStatus if status in allowed]
