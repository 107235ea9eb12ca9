"""
Service request endpoints: create, list, and creator-only update.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldservice.core.database import get_db
from fieldservice.core.security import CurrentUser, get_current_user
from fieldservice.schemas.service_request import (
    ServiceRequestCreate,
    ServiceRequestListItem,
    ServiceRequestResponse,
    ServiceRequestUpdate,
)
from fieldservice.services.service_requests import (
    ServiceRequestAccessDenied,
    ServiceRequestNotFound,
    ServiceRequestService,
)

router = APIRouter()

NOT_FOUND_MESSAGE = "Service request not found"
ACCESS_DENIED_MESSAGE = "Access denied. You can only update service requests you created."


@router.post("", response_model=ServiceRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_service_request(
    payload: ServiceRequestCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Create a service request owned by the caller."""
    service = ServiceRequestService(db)
    return await service.create(payload.model_dump(), creator_id=current_user.id)


@router.get("", response_model=List[ServiceRequestListItem])
async def list_service_requests(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """List every service request with the creator's name resolved."""
    service = ServiceRequestService(db)
    return await service.list_all()


@router.put("/{request_id}", response_model=ServiceRequestResponse)
async def update_service_request(
    request_id: str,
    payload: ServiceRequestUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Update status, comments, signature and feedback references.

    Only the creator of the record may update it.
    """
    service = ServiceRequestService(db)
    try:
        return await service.update_owned(request_id, current_user.id, payload.changes())
    except ServiceRequestNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    except ServiceRequestAccessDenied:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ACCESS_DENIED_MESSAGE)
