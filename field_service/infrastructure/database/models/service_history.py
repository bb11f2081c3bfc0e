"""
Service history SQLAlchemy model.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Text, Uuid

from .base import BaseModel


class ServiceHistoryModel(BaseModel):
    """Completed job record."""

    __tablename__ = "service_history"

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), nullable=False, index=True)
    customer_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    technician_id = Column(Uuid(as_uuid=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=False)
    notes = Column(Text, nullable=True)
