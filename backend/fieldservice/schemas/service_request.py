"""
Pydantic schemas for the service request API.

Field names are snake_case in Python and camelCase on the wire, matching the
payloads the technician app sends (``serviceName``, ``videoFeedback``...).
Identifiers are serialized as ``_id``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from fieldservice.core.config import settings
from fieldservice.models.service_request import ServiceRequestStatus

STATUS_VALUES = tuple(member.value for member in ServiceRequestStatus)


def _check_status(value: Optional[str]) -> Optional[str]:
    if value is None:
        raise ValueError("status cannot be null")
    if settings.STRICT_STATUS_VALUES and value not in STATUS_VALUES:
        raise ValueError(f"status must be one of: {', '.join(STATUS_VALUES)}")
    return value


class CamelModel(BaseModel):
    """Base model accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _id_field():
    return Field(
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )


class ServiceRequestCreate(CamelModel):
    """Body of ``POST /service-requests``."""

    service_name: str = Field(..., min_length=1, max_length=255)
    customer_name: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    company_name: Optional[str] = Field(None, max_length=255)
    scheduled_date_time: Optional[datetime] = None
    assigned_to: Optional[str] = Field(None, max_length=255)
    status: str = ServiceRequestStatus.PENDING.value

    validate_status = field_validator("status")(_check_status)


class ServiceRequestUpdate(CamelModel):
    """
    Body of ``PUT /service-requests/{id}``.

    Only keys present in the request body are written.
    """

    comments: Optional[str] = None
    status: Optional[str] = None
    signature: Optional[str] = None
    audio_feedback: Optional[str] = Field(None, max_length=1024)
    video_feedback: Optional[str] = Field(None, max_length=1024)

    validate_status = field_validator("status")(_check_status)

    def changes(self) -> dict:
        """Fields explicitly provided by the caller, keyed by column name."""
        return self.model_dump(exclude_unset=True)


class CreatorSummary(CamelModel):
    id: UUID = _id_field()
    name: str


class ServiceRequestBase(CamelModel):
    id: UUID = _id_field()
    service_name: str
    customer_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    company_name: Optional[str] = None
    scheduled_date_time: Optional[datetime] = None
    assigned_to: Optional[str] = None
    status: str
    comments: Optional[str] = None
    signature: Optional[str] = None
    audio_feedback: Optional[str] = None
    video_feedback: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ServiceRequestResponse(ServiceRequestBase):
    """Record as returned by create and update."""

    created_by: UUID


class ServiceRequestListItem(ServiceRequestBase):
    """Record as returned by the listing, with the creator resolved to a name."""

    creator: CreatorSummary = Field(
        validation_alias=AliasChoices("creator", "createdBy"),
        serialization_alias="createdBy",
    )
