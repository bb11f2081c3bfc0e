"""
Transaction service for managing database transactions centrally.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from field_service.application.interfaces.services import (
    TransactionServiceInterface,
)
from field_service.config.logging import get_logger

logger = get_logger(__name__)


class TransactionService(TransactionServiceInterface):
    """Commits or rolls back the request-scoped session."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = logger

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        await self.session.commit()
        self.logger.debug("Transaction committed")

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        await self.session.rollback()
        self.logger.debug("Transaction rolled back")
