"""
Scheduling window value object.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class JobWindow:
    """A job's technician, day and time window, used for conflict checks."""

    id: Optional[UUID] = None
    technician_id: Optional[UUID] = None
    scheduled_date: Optional[str] = None  # YYYY-MM-DD
    start_time: Optional[str] = None  # HH:mm
    end_time: Optional[str] = None  # HH:mm

    @property
    def has_time_window(self) -> bool:
        return bool(self.start_time) and bool(self.end_time)

    @property
    def time_display(self) -> str:
        """Get formatted window, e.g. '13:00 - 15:00'."""
        return f"{self.start_time} - {self.end_time}"
