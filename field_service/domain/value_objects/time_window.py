"""
Scheduled time window value object and HH:mm / YYYY-MM-DD helpers.

Times travel as 24-hour ``HH:mm`` strings and dates as ``YYYY-MM-DD``
strings; both are kept verbatim through storage and the JSON API.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple, Union

from field_service.domain.exceptions.validation_error import (
    InvalidFormatError,
    InvalidTimeRangeError,
)

TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

_TIME_RE = re.compile(TIME_PATTERN)
_DATE_RE = re.compile(DATE_PATTERN)


def is_valid_time(value: Optional[str]) -> bool:
    """Check if value is a zero-padded 24-hour HH:mm string."""
    return isinstance(value, str) and bool(_TIME_RE.fullmatch(value))


def is_valid_date(value: Optional[str]) -> bool:
    """Check if value is a YYYY-MM-DD string naming a real calendar day."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_time_to_minutes(value: str, field_name: str = "time") -> int:
    """Convert an HH:mm string to minutes since midnight."""
    if not is_valid_time(value):
        raise InvalidFormatError(field_name, "HH:mm (24-hour)")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def parse_date(value: Union[str, date], field_name: str = "date") -> date:
    """Convert a YYYY-MM-DD string to a date."""
    if isinstance(value, date):
        return value
    if not is_valid_date(value):
        raise InvalidFormatError(field_name, "YYYY-MM-DD")
    return date.fromisoformat(value)


def normalize_time_range(
    start: Optional[str], end: Optional[str]
) -> Union[Tuple[str, str], Tuple[None, None]]:
    """
    Validate a start/end pair.

    Returns ``(None, None)`` when neither bound is set and ``(start, end)``
    when both are set and ``start < end``. Raises
    ``InvalidTimeRangeError`` for a half-specified or inverted window.
    """
    if not start and not end:
        return None, None

    if not start or not end:
        raise InvalidTimeRangeError(
            "Both start and end times must be provided together"
        )

    start_minutes = parse_time_to_minutes(start, "scheduled_time_start")
    end_minutes = parse_time_to_minutes(end, "scheduled_time_end")

    if start_minutes >= end_minutes:
        raise InvalidTimeRangeError("Start time must be before end time")

    return start, end


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open interval overlap: [a_start, a_end) and [b_start, b_end)."""
    return a_start < b_end and b_start < a_end


@dataclass(frozen=True)
class TimeWindow:
    """A validated same-day [start, end) window."""

    start: str
    end: str

    def __post_init__(self):
        """Validate window bounds."""
        normalize_time_range(self.start, self.end)

    @property
    def start_minutes(self) -> int:
        return parse_time_to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return parse_time_to_minutes(self.end)

    @property
    def duration_minutes(self) -> int:
        """Get window length in minutes."""
        return self.end_minutes - self.start_minutes

    @property
    def display(self) -> str:
        """Get formatted window, e.g. '13:00 - 15:00'."""
        return f"{self.start} - {self.end}"

    def overlaps(self, other: "TimeWindow") -> bool:
        """Check overlap with another window; touching edges do not overlap."""
        return intervals_overlap(
            self.start_minutes, self.end_minutes, other.start_minutes, other.end_minutes
        )
