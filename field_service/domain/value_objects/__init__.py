"""
Domain value objects package.
"""

from .actor import Actor
from .job_status import (
    ACTIVE_STATUSES,
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    JobStatus,
    can_transition,
    get_next_statuses,
)
from .job_window import JobWindow
from .notification_kind import NotificationKind
from .service_type import ServiceType
from .time_window import (
    TimeWindow,
    intervals_overlap,
    is_valid_date,
    is_valid_time,
    normalize_time_range,
    parse_time_to_minutes,
)
from .user_role import UserRole
from .zone import Zone

__all__ = [
    "ACTIVE_STATUSES",
    "ALLOWED_TRANSITIONS",
    "Actor",
    "JobStatus",
    "JobWindow",
    "NotificationKind",
    "ServiceType",
    "TERMINAL_STATUSES",
    "TimeWindow",
    "UserRole",
    "Zone",
    "can_transition",
    "get_next_statuses",
    "intervals_overlap",
    "is_valid_date",
    "is_valid_time",
    "normalize_time_range",
    "parse_time_to_minutes",
]
