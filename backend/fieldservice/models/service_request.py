"""
Service request model: scheduled field work owned by its creator.
"""
from datetime import datetime, timezone
import enum
import uuid

from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from fieldservice.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ServiceRequestStatus(str, enum.Enum):
    """Lifecycle status of a service request."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    ON_HOLD = "On Hold"


class ServiceRequest(Base):
    """
    A unit of scheduled work assigned to a technician.

    Only ``status``, ``comments``, ``signature`` and the feedback references
    change after creation; ``created_by`` is fixed at insert time.
    """
    __tablename__ = "service_requests"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Job details
    service_name = Column(String(255), nullable=False)
    customer_name = Column(String(255), nullable=False)
    phone = Column(String(50))
    email = Column(String(255))
    company_name = Column(String(255))
    scheduled_date_time = Column(DateTime(timezone=True))
    assigned_to = Column(String(255), index=True)

    # Technician updates
    status = Column(String(50), nullable=False, default=ServiceRequestStatus.PENDING.value, index=True)
    comments = Column(Text)
    signature = Column(Text)  # base64 data URI
    audio_feedback = Column(String(1024))
    video_feedback = Column(String(1024))

    # Ownership
    created_by = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    creator = relationship("User", lazy="raise")

    # Metadata
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<ServiceRequest(id={self.id}, status={self.status})>"
