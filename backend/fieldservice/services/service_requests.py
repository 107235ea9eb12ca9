"""
Service request persistence and the creator-only update gate.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from fieldservice.core.metrics import record_service_request_update
from fieldservice.models.service_request import ServiceRequest

logger = logging.getLogger(__name__)

# Columns a technician update may touch. Everything else is fixed at creation.
UPDATABLE_FIELDS = frozenset(
    {"comments", "status", "signature", "audio_feedback", "video_feedback"}
)


class ServiceRequestError(Exception):
    """Base class for service request failures."""


class ServiceRequestNotFound(ServiceRequestError):
    def __init__(self, request_id: Any):
        super().__init__(f"Service request {request_id} not found")
        self.request_id = request_id


class ServiceRequestAccessDenied(ServiceRequestError):
    def __init__(self, request_id: Any, user_id: Any):
        super().__init__(f"User {user_id} is not the creator of service request {request_id}")
        self.request_id = request_id
        self.user_id = user_id


def parse_identifier(value: Union[str, UUID]) -> Optional[UUID]:
    """Return ``value`` as a UUID, or None when it is not a valid identifier."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class ServiceRequestService:
    """
    Create, list and update service requests.

    Updates are applied with a single conditional UPDATE keyed on both the
    record id and its creator, so ownership is checked and the write happens
    in the same statement.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: Dict[str, Any], creator_id: Union[str, UUID]) -> ServiceRequest:
        """Persist a new service request owned by ``creator_id``."""
        now = datetime.now(timezone.utc)
        record = ServiceRequest(
            **data,
            created_by=parse_identifier(creator_id),
            created_at=now,
            updated_at=now,
        )
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)

        logger.info(
            "service_request_created",
            extra={"service_request_id": str(record.id), "created_by": str(creator_id)},
        )
        return record

    async def list_all(self) -> List[ServiceRequest]:
        """All service requests, newest first, with the creator loaded."""
        stmt = (
            select(ServiceRequest)
            .options(joinedload(ServiceRequest.creator))
            .order_by(ServiceRequest.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get(self, request_id: Union[str, UUID]) -> Optional[ServiceRequest]:
        identifier = parse_identifier(request_id)
        if identifier is None:
            return None
        stmt = (
            select(ServiceRequest)
            .where(ServiceRequest.id == identifier)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def update_owned(
        self,
        request_id: Union[str, UUID],
        user_id: Union[str, UUID],
        changes: Dict[str, Any],
    ) -> ServiceRequest:
        """
        Apply ``changes`` to a service request created by ``user_id``.

        Raises:
            ServiceRequestNotFound: no record with this id exists
            ServiceRequestAccessDenied: the record belongs to someone else;
                nothing is written
        """
        identifier = parse_identifier(request_id)
        owner = parse_identifier(user_id)
        if identifier is None:
            record_service_request_update("not_found")
            raise ServiceRequestNotFound(request_id)

        values = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
        values["updated_at"] = datetime.now(timezone.utc)

        stmt = (
            update(ServiceRequest)
            .where(ServiceRequest.id == identifier, ServiceRequest.created_by == owner)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)

        if result.rowcount == 0:
            exists = await self.db.scalar(
                select(ServiceRequest.id).where(ServiceRequest.id == identifier)
            )
            if exists is None:
                record_service_request_update("not_found")
                raise ServiceRequestNotFound(request_id)
            record_service_request_update("forbidden")
            logger.warning(
                "service_request_update_denied",
                extra={"service_request_id": str(identifier), "user_id": str(user_id)},
            )
            raise ServiceRequestAccessDenied(request_id, user_id)

        await self.db.commit()
        record_service_request_update("updated")
        logger.info(
            "service_request_updated",
            extra={
                "service_request_id": str(identifier),
                "fields": sorted(key for key in values if key != "updated_at"),
            },
        )
        return await self.get(identifier)
