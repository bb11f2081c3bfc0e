"""
Customer notification kind value object.
"""

from enum import Enum


class NotificationKind(str, Enum):
    """Customer-facing job notification types."""

    APPOINTMENT_CONFIRMATION = "appointment_confirmation"
    ON_THE_WAY = "on_the_way"
    COMPLETION = "completion"
