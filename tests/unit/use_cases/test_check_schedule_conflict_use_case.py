"""
Unit tests for CheckScheduleConflictUseCase.
"""

from uuid import uuid4

import pytest

from field_service.application.use_cases.check_schedule_conflict import (
    CheckScheduleConflictRequest,
    CheckScheduleConflictUseCase,
)
from field_service.domain.exceptions.validation_error import (
    InvalidFormatError,
    InvalidTimeRangeError,
)


class TestCheckScheduleConflictUseCase:
    """Test cases for CheckScheduleConflictUseCase."""

    @pytest.fixture
    def use_case(self, mock_job_repository):
        return CheckScheduleConflictUseCase(job_repo=mock_job_repository)

    @pytest.mark.asyncio
    async def test_reports_overlap(
        self, use_case, make_job, technician_id, mock_job_repository
    ):
        booked = make_job()
        mock_job_repository.list_active_for_technician_on_date.return_value = [booked]

        result = await use_case.execute(
            CheckScheduleConflictRequest(
                technician_id=technician_id,
                scheduled_date="2024-06-01",
                start_time="14:00",
                end_time="16:00",
            )
        )

        assert result.has_conflict is True
        assert result.conflicting_job.id == booked.id

    @pytest.mark.asyncio
    async def test_excludes_job_being_edited(
        self, use_case, make_job, technician_id, mock_job_repository
    ):
        booked = make_job()
        mock_job_repository.list_active_for_technician_on_date.return_value = [booked]

        result = await use_case.execute(
            CheckScheduleConflictRequest(
                technician_id=technician_id,
                scheduled_date="2024-06-01",
                start_time="14:00",
                end_time="16:00",
                exclude_job_id=booked.id,
            )
        )

        assert result.has_conflict is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "missing", ["technician_id", "scheduled_date", "start_time", "end_time"]
    )
    async def test_incomplete_input_has_no_conflict(
        self, use_case, mock_job_repository, missing
    ):
        fields = {
            "technician_id": uuid4(),
            "scheduled_date": "2024-06-01",
            "start_time": "14:00",
            "end_time": "16:00",
        }
        fields[missing] = None

        result = await use_case.execute(CheckScheduleConflictRequest(**fields))

        assert result.has_conflict is False
        mock_job_repository.list_active_for_technician_on_date.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_date(self, use_case):
        with pytest.raises(InvalidFormatError):
            await use_case.execute(
                CheckScheduleConflictRequest(
                    technician_id=uuid4(),
                    scheduled_date="2024-13-01",
                    start_time="14:00",
                    end_time="16:00",
                )
            )

    @pytest.mark.asyncio
    async def test_inverted_range(self, use_case):
        with pytest.raises(InvalidTimeRangeError):
            await use_case.execute(
                CheckScheduleConflictRequest(
                    technician_id=uuid4(),
                    scheduled_date="2024-06-01",
                    start_time="16:00",
                    end_time="14:00",
                )
            )
