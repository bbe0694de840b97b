"""
Health and Info Routes

Liveness probe and service description.
"""

from fastapi import APIRouter

from api.models.responses import HealthResponse, InfoResponse


router = APIRouter(prefix="/api/v1/sms", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns service status for liveness probes.
    """
    return HealthResponse()


@router.get("/info", response_model=InfoResponse)
async def info() -> InfoResponse:
    """Service information."""
    return InfoResponse(
        endpoints={
            "verify": "/api/v1/sms/verify",
            "simpleVerify": "/api/v1/sms/verify/simple",
            "bulkVerify": "/api/v1/sms/verify/bulk",
            "health": "/api/v1/sms/health",
        },
    )
