"""Job lifecycle API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from field_service.api.dependencies import (
    ActorDep,
    AssignTechnicianUseCaseDep,
    CheckScheduleConflictUseCaseDep,
    CompleteJobUseCaseDep,
    CreateJobUseCaseDep,
    JobRepositoryDep,
    TransitionStatusUseCaseDep,
    UnassignTechnicianUseCaseDep,
)
from field_service.api.presentation import status_options
from field_service.api.schemas.common import PaginatedResponse
from field_service.api.schemas.job import (
    AssignTechnicianRequestSchema,
    AssignTechnicianResponse,
    CompleteJobRequestSchema,
    CompleteJobResponse,
    ConflictCheckRequest,
    ConflictWarning,
    JobCreateRequest,
    JobCreateResponse,
    JobListResponse,
    JobResponse,
    StatusOption,
    StatusTransitionRequest,
    StatusTransitionResponse,
)
from field_service.application.interfaces.repositories import JobListQuery
from field_service.application.use_cases.assign_technician import (
    AssignTechnicianRequest,
    UnassignTechnicianRequest,
)
from field_service.application.use_cases.check_schedule_conflict import (
    CheckScheduleConflictRequest,
)
from field_service.application.use_cases.complete_job import CompleteJobRequest
from field_service.application.use_cases.create_job import CreateJobRequest
from field_service.application.use_cases.transition_status import (
    TransitionStatusRequest,
)
from field_service.config.logging import get_logger
from field_service.config.settings import settings
from field_service.domain.exceptions.job_error import (
    JobNotFoundError,
    JobPermissionError,
)
from field_service.domain.value_objects.job_status import JobStatus
from field_service.domain.value_objects.user_role import UserRole
from field_service.domain.value_objects.zone import Zone

logger = get_logger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=JobListResponse)
async def list_jobs(
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    q: Optional[str] = Query(None, max_length=200),
    job_status: Optional[JobStatus] = Query(None, alias="status"),
    zone: Optional[Zone] = None,
    technician_id: Optional[UUID] = None,
    from_date: Optional[str] = Query(None, alias="from"),
    to_date: Optional[str] = Query(None, alias="to"),
    page: int = Query(1, ge=1),
    page_size: int = Query(
        settings.JOBS_DEFAULT_PAGE_SIZE, ge=1, le=settings.JOBS_MAX_PAGE_SIZE
    ),
):
    """List jobs with filters. Technicians only see their own jobs."""
    if actor.role == UserRole.TECHNICIAN:
        technician_id = actor.user_id

    query = JobListQuery(
        q=q,
        status=job_status,
        zone=zone,
        technician_id=technician_id,
        from_date=from_date,
        to_date=to_date,
        page=page,
        page_size=page_size,
    )
    jobs, total = await job_repository.list_jobs(query)

    return JobListResponse(
        items=[JobResponse.from_entity(job) for job in jobs],
        **PaginatedResponse.page_fields(total, query.page, query.page_size),
    )


@router.get("/statuses", response_model=List[StatusOption])
async def list_statuses():
    """List job statuses with display metadata and allowed next statuses."""
    return status_options()


@router.post(
    "", response_model=JobCreateResponse, status_code=status.HTTP_201_CREATED
)
async def create_job(
    job_data: JobCreateRequest,
    actor: ActorDep,
    use_case: CreateJobUseCaseDep,
):
    """Create a job. A schedule conflict is returned as a warning."""
    result = await use_case.execute(
        CreateJobRequest(actor=actor, **job_data.model_dump())
    )
    return JobCreateResponse(
        job=JobResponse.from_entity(result.job),
        conflict=ConflictWarning.from_result(result.conflict),
    )


@router.post("/conflicts/check", response_model=ConflictWarning)
async def check_schedule_conflict(
    check: ConflictCheckRequest,
    actor: ActorDep,
    use_case: CheckScheduleConflictUseCaseDep,
):
    """Check a proposed window against the technician's other jobs."""
    result = await use_case.execute(CheckScheduleConflictRequest(**check.model_dump()))
    return ConflictWarning.from_result(result)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: UUID, actor: ActorDep, job_repository: JobRepositoryDep):
    """Get a single job."""
    job = await job_repository.get_by_id(job_id)
    if not job:
        raise JobNotFoundError(job_id)
    if actor.role == UserRole.TECHNICIAN and job.technician_id != actor.user_id:
        raise JobPermissionError("Technicians can only view their own jobs")
    return JobResponse.from_entity(job)


@router.post("/{job_id}/assign", response_model=AssignTechnicianResponse)
async def assign_technician(
    job_id: UUID,
    assignment: AssignTechnicianRequestSchema,
    actor: ActorDep,
    use_case: AssignTechnicianUseCaseDep,
):
    """Assign a technician. A schedule conflict is returned as a warning."""
    result = await use_case.execute(
        AssignTechnicianRequest(
            actor=actor,
            job_id=job_id,
            technician_id=assignment.technician_id,
            scheduled_date=assignment.scheduled_date,
        )
    )
    return AssignTechnicianResponse(
        job=JobResponse.from_entity(result.job),
        conflict=ConflictWarning.from_result(result.conflict),
        notification_queued=result.notification_queued,
    )


@router.delete("/{job_id}/technician", response_model=JobResponse)
async def unassign_technician(
    job_id: UUID, actor: ActorDep, use_case: UnassignTechnicianUseCaseDep
):
    """Remove the job's technician."""
    job = await use_case.execute(UnassignTechnicianRequest(actor=actor, job_id=job_id))
    return JobResponse.from_entity(job)


@router.post("/{job_id}/transition", response_model=StatusTransitionResponse)
async def transition_status(
    job_id: UUID,
    transition: StatusTransitionRequest,
    actor: ActorDep,
    use_case: TransitionStatusUseCaseDep,
):
    """Move a job to a new status."""
    result = await use_case.execute(
        TransitionStatusRequest(
            actor=actor,
            job_id=job_id,
            to_status=transition.to,
            expected_status=transition.from_status,
            notes=transition.notes,
        )
    )
    return StatusTransitionResponse(
        job=JobResponse.from_entity(result.job),
        previous_status=result.event.from_status,
        notification_queued=result.notification_queued,
    )


@router.post("/{job_id}/complete", response_model=CompleteJobResponse)
async def complete_job(
    job_id: UUID,
    completion: CompleteJobRequestSchema,
    actor: ActorDep,
    use_case: CompleteJobUseCaseDep,
):
    """Complete a job and record its service history."""
    result = await use_case.execute(
        CompleteJobRequest(
            actor=actor,
            job_id=job_id,
            completed_at=completion.completed_at,
            notes=completion.notes,
            expected_status=completion.from_status,
        )
    )
    return CompleteJobResponse(
        job=JobResponse.from_entity(result.job),
        service_history_id=result.service_history.id,
        completed_at=result.service_history.completed_at,
        notification_queued=result.notification_queued,
    )
