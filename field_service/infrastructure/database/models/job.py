"""
Job SQLAlchemy model.
"""

from sqlalchemy import Column, Date, DateTime, Index, String, Text, Uuid

from .base import BaseModel, utcnow


class JobModel(BaseModel):
    """Job database model."""

    __tablename__ = "jobs"

    customer_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    technician_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    zone = Column(String(16), nullable=True, index=True)
    status = Column(String(20), nullable=False, default="scheduled", index=True)
    service_type = Column(String(50), nullable=True)

    # Times stay as HH:mm text
    scheduled_date = Column(Date, nullable=True, index=True)
    scheduled_time_start = Column(String(5), nullable=True)
    scheduled_time_end = Column(String(5), nullable=True)

    description = Column(Text, nullable=True)
    internal_notes = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_jobs_technician_date", "technician_id", "scheduled_date"),
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, status={self.status})>"
