# ================================
# API V1 INITIALIZATION (api/v1/__init__.py)
# ================================

"""
API Version 1

Alle V1 API Routes
"""

from fastapi import APIRouter

from app.schemas.base import ErrorResponse

from app.api.v1 import bookings, package_tracking, pricing, trials

# Create V1 router
v1_router = APIRouter(prefix="/v1")

v1_router.include_router(
    pricing.router,
    prefix="/pricing",
    tags=["Pricing"]
)

v1_router.include_router(
    bookings.router,
    prefix="/bookings",
    tags=["Bookings"],
    responses={
        409: {"model": ErrorResponse, "description": "Invalid status transition"}
    }
)

v1_router.include_router(
    trials.router,
    prefix="/trials",
    tags=["Trials"]
)

v1_router.include_router(
    package_tracking.router,
    prefix="/package-tracking",
    tags=["Package Tracking"],
    responses={
        409: {"model": ErrorResponse, "description": "Invalid status transition"}
    }
)

# Health check endpoint für V1
@v1_router.get("/health", tags=["Health"])
async def v1_health_check():
    """V1 API Health Check"""
    return {
        "status": "healthy",
        "version": "1.0.0",
        "api_version": "v1"
    }

__all__ = ["v1_router"]
