"""
Integration tests for the job lifecycle repositories on an in-memory database.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy import select

from field_service.application.interfaces.repositories import JobListQuery
from field_service.application.use_cases.complete_job import (
    CompleteJobRequest,
    CompleteJobUseCase,
)
from field_service.application.use_cases.create_job import (
    CreateJobRequest,
    CreateJobUseCase,
)
from field_service.application.use_cases.transition_status import (
    TransitionStatusRequest,
    TransitionStatusUseCase,
)
from field_service.domain.exceptions.job_error import JobNotFoundError
from field_service.domain.exceptions.validation_error import ValidationError
from field_service.domain.value_objects.job_status import JobStatus
from field_service.infrastructure.database.models import (
    AuditLogModel,
    ServiceHistoryModel,
)
from field_service.infrastructure.database.repositories import (
    AuditLogRepository,
    JobRepository,
    ServiceHistoryRepository,
    TransactionService,
)

pytestmark = pytest.mark.integration


class TestJobRepository:
    """Test JobRepository against SQLite."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, db_session, make_job):
        repo = JobRepository(db_session)
        job = make_job(zone="N", service_type="carpet_cleaning")

        await repo.create(job)
        loaded = await repo.get_by_id(job.id)

        assert loaded.id == job.id
        assert loaded.scheduled_date == "2024-06-01"
        assert loaded.scheduled_time_start == "13:00"
        assert loaded.status == JobStatus.SCHEDULED
        assert loaded.zone.value == "N"

    @pytest.mark.asyncio
    async def test_get_missing(self, db_session):
        assert await JobRepository(db_session).get_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, db_session, make_job):
        with pytest.raises(JobNotFoundError):
            await JobRepository(db_session).update(make_job())

    @pytest.mark.asyncio
    async def test_active_jobs_for_technician_on_date(
        self, db_session, make_job, technician_id
    ):
        repo = JobRepository(db_session)
        late = make_job(scheduled_time_start="16:00", scheduled_time_end="17:00")
        early = make_job(scheduled_time_start="08:00", scheduled_time_end="09:00")
        cancelled = make_job(status=JobStatus.CANCELLED)
        other_day = make_job(scheduled_date="2024-06-02")
        other_tech = make_job(technician_id=uuid4())
        for job in (late, early, cancelled, other_day, other_tech):
            await repo.create(job)

        jobs = await repo.list_active_for_technician_on_date(technician_id, "2024-06-01")

        assert [job.id for job in jobs] == [early.id, late.id]

    @pytest.mark.asyncio
    async def test_list_jobs_filters_and_pages(self, db_session, make_job):
        repo = JobRepository(db_session)
        jobs = [
            make_job(scheduled_date=f"2024-06-0{day}", description=f"Visit {day}")
            for day in range(1, 6)
        ]
        jobs.append(
            make_job(
                scheduled_date=None, scheduled_time_start=None, scheduled_time_end=None
            )
        )
        for job in jobs:
            await repo.create(job)

        page, total = await repo.list_jobs(
            JobListQuery(from_date="2024-06-02", to_date="2024-06-04", page_size=2)
        )
        assert total == 3
        assert [job.scheduled_date for job in page] == ["2024-06-02", "2024-06-03"]

        all_jobs, total = await repo.list_jobs(JobListQuery())
        assert total == 6
        assert all_jobs[-1].scheduled_date is None

        matched, total = await repo.list_jobs(JobListQuery(q="visit 3"))
        assert total == 1
        assert matched[0].description == "Visit 3"

    @pytest.mark.asyncio
    async def test_list_jobs_orders_times_chronologically(self, db_session, make_job):
        repo = JobRepository(db_session)
        for start, end in [("13:00", "14:00"), ("09:00", "10:00"), ("10:30", "11:00")]:
            await repo.create(
                make_job(scheduled_time_start=start, scheduled_time_end=end)
            )

        jobs, _ = await repo.list_jobs(JobListQuery())

        assert [job.scheduled_time_start for job in jobs] == ["09:00", "10:30", "13:00"]

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, db_session, make_job):
        repo = JobRepository(db_session)
        await repo.create(make_job(description="50% off deep clean"))
        await repo.create(make_job(description="500 sq ft office"))
        await repo.create(make_job(description="tile_and_grout"))
        await repo.create(make_job(description="tile and grout"))

        percent, total = await repo.list_jobs(JobListQuery(q="50%"))
        assert total == 1
        assert percent[0].description == "50% off deep clean"

        underscore, total = await repo.list_jobs(JobListQuery(q="tile_"))
        assert total == 1
        assert underscore[0].description == "tile_and_grout"


class TestJobLifecycleWithDatabase:
    """Run the lifecycle use cases over real repositories."""

    @pytest.mark.asyncio
    async def test_create_start_complete(
        self, db_session, dispatcher, technician, technician_id, make_job
    ):
        job_repo = JobRepository(db_session)
        audit_repo = AuditLogRepository(db_session)
        transactions = TransactionService(db_session)
        notifications = AsyncMock()
        notifications.notify_job = AsyncMock(return_value=False)

        await job_repo.create(make_job())
        await transactions.commit()

        created = await CreateJobUseCase(job_repo, audit_repo, transactions).execute(
            CreateJobRequest(
                actor=dispatcher,
                customer_id=uuid4(),
                technician_id=technician_id,
                scheduled_date="2024-06-01",
                scheduled_time_start="14:00",
                scheduled_time_end="16:00",
            )
        )
        assert created.conflict.has_conflict is True

        await TransitionStatusUseCase(
            job_repo, audit_repo, transactions, notifications
        ).execute(
            TransitionStatusRequest(
                actor=technician, job_id=created.job.id, to_status=JobStatus.IN_PROGRESS
            )
        )

        result = await CompleteJobUseCase(
            job_repo,
            ServiceHistoryRepository(db_session),
            audit_repo,
            transactions,
            notifications,
        ).execute(
            CompleteJobRequest(actor=technician, job_id=created.job.id, notes="Done")
        )

        stored = await job_repo.get_by_id(created.job.id)
        assert stored.status == JobStatus.COMPLETED

        history = (
            await db_session.execute(
                select(ServiceHistoryModel).where(
                    ServiceHistoryModel.job_id == created.job.id
                )
            )
        ).scalar_one()
        assert history.id == result.service_history.id
        assert history.notes == "Done"

        actions = (
            await db_session.execute(
                select(AuditLogModel.action)
                .where(AuditLogModel.entity_id == created.job.id)
                .order_by(AuditLogModel.created_at)
            )
        ).scalars().all()
        assert sorted(actions) == ["COMPLETE_JOB", "CREATE", "STATUS_TRANSITION"]

    @pytest.mark.asyncio
    async def test_generic_transition_cannot_complete(
        self, db_session, technician, make_job
    ):
        job_repo = JobRepository(db_session)
        job = make_job(status=JobStatus.IN_PROGRESS)
        await job_repo.create(job)
        await TransactionService(db_session).commit()

        with pytest.raises(ValidationError):
            await TransitionStatusUseCase(
                job_repo,
                AuditLogRepository(db_session),
                TransactionService(db_session),
                AsyncMock(),
            ).execute(
                TransitionStatusRequest(
                    actor=technician, job_id=job.id, to_status=JobStatus.COMPLETED
                )
            )

        stored = await job_repo.get_by_id(job.id)
        assert stored.status == JobStatus.IN_PROGRESS
        history = (
            await db_session.execute(
                select(ServiceHistoryModel).where(ServiceHistoryModel.job_id == job.id)
            )
        ).scalars().all()
        assert history == []
