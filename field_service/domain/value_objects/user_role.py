"""
User role value object.
"""

from enum import Enum


class UserRole(str, Enum):
    """Dashboard user role enumeration, lowest privilege first."""

    VIEWER = "viewer"
    TECHNICIAN = "technician"
    DISPATCHER = "dispatcher"
    ADMIN = "admin"

    @property
    def level(self) -> int:
        """Get privilege level used for minimum-role checks."""
        return list(UserRole).index(self)

    def at_least(self, minimum: "UserRole") -> bool:
        """Check if this role meets a minimum role requirement."""
        return self.level >= UserRole(minimum).level

    @property
    def manages_all_jobs(self) -> bool:
        """Check if role may act on jobs assigned to anyone."""
        return self in [UserRole.DISPATCHER, UserRole.ADMIN]
