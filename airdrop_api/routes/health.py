"""
Health Check Route

Simple health check endpoint for liveness probes.
"""

from fastapi import APIRouter

from airdrop_api import __version__
from airdrop_api.models.responses import HealthResponse


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns service status for liveness probes.
    """
    return HealthResponse(ok=True, service="airdrop-api", version=__version__)
