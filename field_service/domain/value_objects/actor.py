"""
Actor value object: the authenticated caller of a job operation.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from field_service.domain.value_objects.user_role import UserRole


@dataclass(frozen=True)
class Actor:
    """Authenticated user and role resolved upstream."""

    user_id: UUID
    role: UserRole

    def __post_init__(self):
        """Validate actor fields."""
        if not self.user_id:
            raise ValueError("Actor user id is required")
        # Accept raw role strings from headers or tokens
        object.__setattr__(self, "role", UserRole(self.role))

    @property
    def is_dispatcher(self) -> bool:
        """Check if actor is a dispatcher or admin."""
        return self.role.manages_all_jobs

    def has_minimum_role(self, minimum: UserRole) -> bool:
        """Check if actor meets a minimum role."""
        return self.role.at_least(minimum)

    def can_act_on_job(self, technician_id: Optional[UUID]) -> bool:
        """
        Check if actor may change a job assigned to technician_id.

        Dispatchers and admins may act on any job; technicians only on jobs
        assigned to themselves.
        """
        if self.is_dispatcher:
            return True
        if self.role == UserRole.TECHNICIAN:
            return technician_id is not None and technician_id == self.user_id
        return False
