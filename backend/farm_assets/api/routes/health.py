"""Health Probe - liveness endpoint for container orchestration.

Invariants:
    - GET /health/ always returns 200 if the process is up
"""

from fastapi import APIRouter, status

from farm_assets.config import get_settings

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }
