"""
Use cases package.

This package contains the job lifecycle use cases that orchestrate the
domain rules, repositories and notification service.
"""

from .assign_technician import AssignTechnicianUseCase, UnassignTechnicianUseCase
from .check_schedule_conflict import CheckScheduleConflictUseCase
from .complete_job import CompleteJobUseCase
from .create_job import CreateJobUseCase
from .transition_status import TransitionStatusUseCase

__all__ = [
    "AssignTechnicianUseCase",
    "CheckScheduleConflictUseCase",
    "CompleteJobUseCase",
    "CreateJobUseCase",
    "TransitionStatusUseCase",
    "UnassignTechnicianUseCase",
]
