"""
FastAPI dependency injection container.
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from field_service.application.services.schedule_conflict_detector import (
    ScheduleConflictDetector,
)
from field_service.application.use_cases.assign_technician import (
    AssignTechnicianUseCase,
    UnassignTechnicianUseCase,
)
from field_service.application.use_cases.check_schedule_conflict import (
    CheckScheduleConflictUseCase,
)
from field_service.application.use_cases.complete_job import CompleteJobUseCase
from field_service.application.use_cases.create_job import CreateJobUseCase
from field_service.application.use_cases.transition_status import (
    TransitionStatusUseCase,
)
from field_service.config.database import get_db_session
from field_service.config.logging import get_logger
from field_service.domain.value_objects.actor import Actor
from field_service.domain.value_objects.user_role import UserRole
from field_service.infrastructure.database.repositories.audit_log_repository import (
    AuditLogRepository,
)
from field_service.infrastructure.database.repositories.job_repository import (
    JobRepository,
)
from field_service.infrastructure.database.repositories.service_history_repository import (
    ServiceHistoryRepository,
)
from field_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from field_service.infrastructure.monitoring.health_checks import HealthChecker
from field_service.infrastructure.notifications.notification_service import (
    CeleryNotificationService,
)

logger = get_logger(__name__)


# Identity (resolved upstream, forwarded as headers)
async def get_current_actor(
    x_user_id: Annotated[Optional[str], Header()] = None,
    x_user_role: Annotated[Optional[str], Header()] = None,
) -> Actor:
    """Build the acting user from the identity headers."""
    if not x_user_id or not x_user_role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing identity headers",
        )

    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user id",
        )

    try:
        role = UserRole(x_user_role.lower())
    except ValueError:
        logger.warning("Unknown user role", user_id=x_user_id, role=x_user_role)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Unknown role '{x_user_role}'",
        )

    return Actor(user_id=user_id, role=role)


# Database Dependencies
async def get_job_repository(
    db: AsyncSession = Depends(get_db_session),
) -> JobRepository:
    """Get job repository instance."""
    return JobRepository(db)


async def get_service_history_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ServiceHistoryRepository:
    """Get service history repository instance."""
    return ServiceHistoryRepository(db)


async def get_audit_log_repository(
    db: AsyncSession = Depends(get_db_session),
) -> AuditLogRepository:
    """Get audit log repository instance."""
    return AuditLogRepository(db)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    """Get transaction service bound to the request session."""
    return TransactionService(db)


# Service Dependencies
async def get_notification_service() -> CeleryNotificationService:
    """Get notification service instance."""
    return CeleryNotificationService()


async def get_conflict_detector() -> ScheduleConflictDetector:
    """Get schedule conflict detector instance."""
    return ScheduleConflictDetector()


async def get_health_checker() -> HealthChecker:
    """Get health checker instance."""
    return HealthChecker()


# Type aliases for cleaner dependency injection
ActorDep = Annotated[Actor, Depends(get_current_actor)]
JobRepositoryDep = Annotated[JobRepository, Depends(get_job_repository)]
ServiceHistoryRepositoryDep = Annotated[
    ServiceHistoryRepository, Depends(get_service_history_repository)
]
AuditLogRepositoryDep = Annotated[AuditLogRepository, Depends(get_audit_log_repository)]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
NotificationServiceDep = Annotated[
    CeleryNotificationService, Depends(get_notification_service)
]
ConflictDetectorDep = Annotated[
    ScheduleConflictDetector, Depends(get_conflict_detector)
]
HealthCheckerDep = Annotated[HealthChecker, Depends(get_health_checker)]


# Use case Dependencies
async def get_create_job_use_case(
    job_repo: JobRepositoryDep,
    audit_repo: AuditLogRepositoryDep,
    transaction_service: TransactionServiceDep,
    conflict_detector: ConflictDetectorDep,
) -> CreateJobUseCase:
    return CreateJobUseCase(job_repo, audit_repo, transaction_service, conflict_detector)


async def get_assign_technician_use_case(
    job_repo: JobRepositoryDep,
    audit_repo: AuditLogRepositoryDep,
    transaction_service: TransactionServiceDep,
    notification_service: NotificationServiceDep,
    conflict_detector: ConflictDetectorDep,
) -> AssignTechnicianUseCase:
    return AssignTechnicianUseCase(
        job_repo, audit_repo, transaction_service, notification_service, conflict_detector
    )


async def get_unassign_technician_use_case(
    job_repo: JobRepositoryDep,
    audit_repo: AuditLogRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> UnassignTechnicianUseCase:
    return UnassignTechnicianUseCase(job_repo, audit_repo, transaction_service)


async def get_transition_status_use_case(
    job_repo: JobRepositoryDep,
    audit_repo: AuditLogRepositoryDep,
    transaction_service: TransactionServiceDep,
    notification_service: NotificationServiceDep,
) -> TransitionStatusUseCase:
    return TransitionStatusUseCase(
        job_repo, audit_repo, transaction_service, notification_service
    )


async def get_complete_job_use_case(
    job_repo: JobRepositoryDep,
    service_history_repo: ServiceHistoryRepositoryDep,
    audit_repo: AuditLogRepositoryDep,
    transaction_service: TransactionServiceDep,
    notification_service: NotificationServiceDep,
) -> CompleteJobUseCase:
    return CompleteJobUseCase(
        job_repo,
        service_history_repo,
        audit_repo,
        transaction_service,
        notification_service,
    )


async def get_check_schedule_conflict_use_case(
    job_repo: JobRepositoryDep,
    conflict_detector: ConflictDetectorDep,
) -> CheckScheduleConflictUseCase:
    return CheckScheduleConflictUseCase(job_repo, conflict_detector)


CreateJobUseCaseDep = Annotated[CreateJobUseCase, Depends(get_create_job_use_case)]
AssignTechnicianUseCaseDep = Annotated[
    AssignTechnicianUseCase, Depends(get_assign_technician_use_case)
]
UnassignTechnicianUseCaseDep = Annotated[
    UnassignTechnicianUseCase, Depends(get_unassign_technician_use_case)
]
TransitionStatusUseCaseDep = Annotated[
    TransitionStatusUseCase, Depends(get_transition_status_use_case)
]
CompleteJobUseCaseDep = Annotated[CompleteJobUseCase, Depends(get_complete_job_use_case)]
CheckScheduleConflictUseCaseDep = Annotated[
    CheckScheduleConflictUseCase, Depends(get_check_schedule_conflict_use_case)
]
