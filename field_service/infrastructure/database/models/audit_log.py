"""
Audit log SQLAlchemy model.
"""

from sqlalchemy import JSON, Column, String, Uuid

from .base import BaseModel


class AuditLogModel(BaseModel):
    """Append-only audit log row."""

    __tablename__ = "audit_log"

    actor_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    action = Column(String(50), nullable=False)
    entity = Column(String(50), nullable=False, default="job")
    entity_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    meta = Column(JSON, nullable=False, default=dict)
