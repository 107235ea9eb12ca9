"""
Field Service API - Main Application Entry Point
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from prometheus_client import make_asgi_app

from fieldservice.api.router import api_router
from fieldservice.core.config import settings
from fieldservice.core.database import init_db
from fieldservice.core.errors import register_exception_handlers
from fieldservice.core.logging import RequestContextMiddleware, setup_logging
from fieldservice.core.metrics import MetricsMiddleware
from fieldservice.core.rate_limiter import RateLimitMiddleware, limiter
from fieldservice.core.redis import close_redis


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for startup and shutdown."""
    setup_logging()
    await init_db()
    yield
    await close_redis()


app = FastAPI(
    title="Field Service",
    description="Service requests for field technicians: status, comments and signature capture",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
)
app.state.limiter = limiter

register_exception_handlers(app)

# Middleware (last added runs first)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount Prometheus metrics
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

# Include API routes
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "fieldservice"}


@app.get("/")
async def root():
    """Root endpoint with system information."""
    return {
        "service": "Field Service API",
        "version": "1.0.0",
        "docs": f"{settings.API_PREFIX}/docs",
        "health": "/health",
        "metrics": "/metrics",
    }
