"""
Pytest configuration and fixtures.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("NOTIFICATIONS_ENABLED", "false")

from typing import AsyncGenerator
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from field_service.application.interfaces.repositories import (
    AuditLogRepositoryInterface,
    JobRepositoryInterface,
    ServiceHistoryRepositoryInterface,
)
from field_service.application.interfaces.services import (
    NotificationServiceInterface,
    TransactionServiceInterface,
)
from field_service.domain.entities.job import Job
from field_service.domain.value_objects.actor import Actor
from field_service.domain.value_objects.job_status import JobStatus
from field_service.domain.value_objects.user_role import UserRole
from field_service.infrastructure.database.models import Base

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def technician_id():
    return uuid4()


@pytest.fixture
def dispatcher():
    """Dispatcher actor."""
    return Actor(user_id=uuid4(), role=UserRole.DISPATCHER)


@pytest.fixture
def technician(technician_id):
    """Technician actor."""
    return Actor(user_id=technician_id, role=UserRole.TECHNICIAN)


@pytest.fixture
def viewer():
    return Actor(user_id=uuid4(), role=UserRole.VIEWER)


@pytest.fixture
def make_job(technician_id):
    """Factory for jobs assigned to the technician fixture by default."""

    def _make_job(**overrides) -> Job:
        fields = {
            "customer_id": uuid4(),
            "technician_id": technician_id,
            "status": JobStatus.SCHEDULED,
            "scheduled_date": "2024-06-01",
            "scheduled_time_start": "13:00",
            "scheduled_time_end": "15:00",
            "description": "Carpet cleaning, 3 rooms",
        }
        fields.update(overrides)
        return Job(**fields)

    return _make_job


@pytest.fixture
def mock_job_repository():
    """Mock job repository that echoes saved jobs."""
    mock_repo = AsyncMock(spec=JobRepositoryInterface)

    mock_repo.get_by_id = AsyncMock(return_value=None)
    mock_repo.create = AsyncMock(side_effect=lambda job: job)
    mock_repo.update = AsyncMock(side_effect=lambda job: job)
    mock_repo.list_active_for_technician_on_date = AsyncMock(return_value=[])
    mock_repo.list_jobs = AsyncMock(return_value=([], 0))

    return mock_repo


@pytest.fixture
def mock_audit_repository():
    """Mock audit log repository."""
    mock_repo = AsyncMock(spec=AuditLogRepositoryInterface)
    mock_repo.record = AsyncMock(side_effect=lambda entry: entry)
    return mock_repo


@pytest.fixture
def mock_service_history_repository():
    """Mock service history repository."""
    mock_repo = AsyncMock(spec=ServiceHistoryRepositoryInterface)
    mock_repo.create = AsyncMock(side_effect=lambda entry: entry)
    return mock_repo


@pytest.fixture
def mock_transaction_service():
    """Mock transaction service."""
    return AsyncMock(spec=TransactionServiceInterface)


@pytest.fixture
def mock_notification_service():
    """Mock notification service that always queues."""
    mock_service = AsyncMock(spec=NotificationServiceInterface)
    mock_service.notify_job = AsyncMock(return_value=True)
    return mock_service
