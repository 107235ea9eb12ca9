"""
Convenience exports for endpoint routers.
"""

from .auth import router as auth_router
from .health import router as health_router
from .service_requests import router as service_requests_router

__all__ = [
    "auth_router",
    "health_router",
    "service_requests_router",
]
