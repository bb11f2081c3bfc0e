"""
Application services package.
"""

from .schedule_conflict_detector import (
    NO_CONFLICT,
    ConflictResult,
    ScheduleConflictDetector,
    check_time_conflict,
    find_time_conflicts,
)

__all__ = [
    "ConflictResult",
    "NO_CONFLICT",
    "ScheduleConflictDetector",
    "check_time_conflict",
    "find_time_conflicts",
]
