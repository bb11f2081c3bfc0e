"""
Unit tests for TransitionStatusUseCase.
"""

from uuid import uuid4

import pytest

from field_service.application.use_cases.create_job import (
    CreateJobRequest,
    CreateJobUseCase,
)
from field_service.application.use_cases.transition_status import (
    TransitionStatusRequest,
    TransitionStatusUseCase,
)
from field_service.domain.entities.audit_entry import AuditAction
from field_service.domain.exceptions.job_error import (
    InvalidStatusTransitionError,
    JobNotFoundError,
    JobPermissionError,
    JobStatusConflictError,
)
from field_service.domain.exceptions.validation_error import ValidationError
from field_service.domain.value_objects.actor import Actor
from field_service.domain.value_objects.job_status import JobStatus
from field_service.domain.value_objects.notification_kind import NotificationKind
from field_service.domain.value_objects.user_role import UserRole


@pytest.fixture
def use_case(
    mock_job_repository,
    mock_audit_repository,
    mock_transaction_service,
    mock_notification_service,
):
    return TransitionStatusUseCase(
        job_repo=mock_job_repository,
        audit_repo=mock_audit_repository,
        transaction_service=mock_transaction_service,
        notification_service=mock_notification_service,
    )


class TestTransitionStatusUseCase:
    """Test cases for TransitionStatusUseCase."""

    @pytest.mark.asyncio
    async def test_start_job_notifies_customer(
        self,
        use_case,
        make_job,
        technician,
        mock_job_repository,
        mock_audit_repository,
        mock_notification_service,
    ):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job

        result = await use_case.execute(
            TransitionStatusRequest(
                actor=technician, job_id=job.id, to_status=JobStatus.IN_PROGRESS
            )
        )

        assert result.job.status == JobStatus.IN_PROGRESS
        assert result.event.from_status == JobStatus.SCHEDULED
        assert result.event.to_status == JobStatus.IN_PROGRESS
        assert result.event.changed_by == technician.user_id
        assert result.notification_queued is True
        mock_notification_service.notify_job.assert_called_once_with(
            job, NotificationKind.ON_THE_WAY
        )

        entry = mock_audit_repository.record.call_args.args[0]
        assert entry.action == AuditAction.STATUS_TRANSITION
        assert entry.meta["from"] == "scheduled"
        assert entry.meta["to"] == "in_progress"

    @pytest.mark.asyncio
    async def test_cancel_does_not_notify(
        self, use_case, make_job, dispatcher, mock_job_repository, mock_notification_service
    ):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job

        result = await use_case.execute(
            TransitionStatusRequest(
                actor=dispatcher,
                job_id=job.id,
                to_status="cancelled",
                notes="Customer rescheduled",
            )
        )

        assert result.job.status == JobStatus.CANCELLED
        assert result.notification_queued is False
        assert result.event.to_audit_meta()["notes"] == "Customer rescheduled"
        mock_notification_service.notify_job.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_transition_leaves_job_untouched(
        self, use_case, make_job, technician, mock_job_repository
    ):
        job = make_job(status=JobStatus.IN_PROGRESS)
        mock_job_repository.get_by_id.return_value = job

        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            await use_case.execute(
                TransitionStatusRequest(
                    actor=technician, job_id=job.id, to_status=JobStatus.SCHEDULED
                )
            )

        assert exc_info.value.from_status == "in_progress"
        assert exc_info.value.to_status == "scheduled"
        assert job.status == JobStatus.IN_PROGRESS
        mock_job_repository.update.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [JobStatus.COMPLETED, JobStatus.CANCELLED])
    async def test_terminal_jobs_are_frozen(
        self, use_case, make_job, dispatcher, mock_job_repository, status
    ):
        job = make_job(status=status)
        mock_job_repository.get_by_id.return_value = job

        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(
                TransitionStatusRequest(
                    actor=dispatcher, job_id=job.id, to_status=JobStatus.IN_PROGRESS
                )
            )

    @pytest.mark.asyncio
    async def test_completion_requires_complete_use_case(
        self,
        use_case,
        make_job,
        technician,
        mock_job_repository,
        mock_audit_repository,
        mock_transaction_service,
    ):
        """Test that a generic transition cannot skip the service history."""
        job = make_job(status=JobStatus.IN_PROGRESS)
        mock_job_repository.get_by_id.return_value = job

        with pytest.raises(ValidationError):
            await use_case.execute(
                TransitionStatusRequest(
                    actor=technician, job_id=job.id, to_status=JobStatus.COMPLETED
                )
            )

        assert job.status == JobStatus.IN_PROGRESS
        mock_job_repository.update.assert_not_called()
        mock_audit_repository.record.assert_not_called()
        mock_transaction_service.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_stale_expected_status(
        self, use_case, make_job, technician, mock_job_repository
    ):
        job = make_job(status=JobStatus.IN_PROGRESS)
        mock_job_repository.get_by_id.return_value = job

        with pytest.raises(JobStatusConflictError) as exc_info:
            await use_case.execute(
                TransitionStatusRequest(
                    actor=technician,
                    job_id=job.id,
                    to_status=JobStatus.IN_PROGRESS,
                    expected_status=JobStatus.SCHEDULED,
                )
            )

        assert exc_info.value.expected_status == "scheduled"
        assert exc_info.value.actual_status == "in_progress"

    @pytest.mark.asyncio
    async def test_other_technician_forbidden(
        self, use_case, make_job, mock_job_repository
    ):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job
        other = Actor(user_id=uuid4(), role=UserRole.TECHNICIAN)

        with pytest.raises(JobPermissionError):
            await use_case.execute(
                TransitionStatusRequest(
                    actor=other, job_id=job.id, to_status=JobStatus.IN_PROGRESS
                )
            )

    @pytest.mark.asyncio
    async def test_missing_job(self, use_case, dispatcher):
        with pytest.raises(JobNotFoundError):
            await use_case.execute(
                TransitionStatusRequest(
                    actor=dispatcher, job_id=uuid4(), to_status=JobStatus.CANCELLED
                )
            )

    @pytest.mark.asyncio
    async def test_rolls_back_when_commit_fails(
        self,
        use_case,
        make_job,
        dispatcher,
        mock_job_repository,
        mock_transaction_service,
        mock_notification_service,
    ):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job
        mock_transaction_service.commit.side_effect = RuntimeError("commit failed")

        with pytest.raises(RuntimeError):
            await use_case.execute(
                TransitionStatusRequest(
                    actor=dispatcher, job_id=job.id, to_status=JobStatus.IN_PROGRESS
                )
            )

        mock_transaction_service.rollback.assert_called_once()
        mock_notification_service.notify_job.assert_not_called()


class TestJobLifecycleScenario:
    """Create a conflicting job, start it, then try to move it back."""

    @pytest.mark.asyncio
    async def test_conflict_is_advisory_and_lifecycle_is_enforced(
        self,
        use_case,
        make_job,
        dispatcher,
        technician,
        technician_id,
        mock_job_repository,
        mock_audit_repository,
        mock_transaction_service,
    ):
        booked = make_job()
        mock_job_repository.list_active_for_technician_on_date.return_value = [booked]
        create = CreateJobUseCase(
            job_repo=mock_job_repository,
            audit_repo=mock_audit_repository,
            transaction_service=mock_transaction_service,
        )

        created = await create.execute(
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
        assert created.job.status == JobStatus.SCHEDULED

        mock_job_repository.get_by_id.return_value = created.job
        started = await use_case.execute(
            TransitionStatusRequest(
                actor=technician,
                job_id=created.job.id,
                to_status=JobStatus.IN_PROGRESS,
            )
        )
        assert started.job.status == JobStatus.IN_PROGRESS

        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(
                TransitionStatusRequest(
                    actor=technician,
                    job_id=created.job.id,
                    to_status=JobStatus.SCHEDULED,
                )
            )
        assert created.job.status == JobStatus.IN_PROGRESS
