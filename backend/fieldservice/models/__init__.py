"""
SQLAlchemy database models.
"""

from fieldservice.models.auth import User
from fieldservice.models.service_request import ServiceRequest, ServiceRequestStatus

__all__ = [
    "User",
    "ServiceRequest",
    "ServiceRequestStatus",
]
