"""
API router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from fieldservice.api.endpoints.auth import router as auth_router
from fieldservice.api.endpoints.health import router as health_router
from fieldservice.api.endpoints.service_requests import router as service_requests_router

api_router = APIRouter()

api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(
    service_requests_router, prefix="/service-requests", tags=["service-requests"]
)
