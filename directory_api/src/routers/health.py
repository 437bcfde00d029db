"""
Health router.

The health check never touches the store, so it reports ok even while the
database is unreachable.
"""

from fastapi import APIRouter, status

from shared.models import HealthResponse, HealthStatus

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health Check",
)
async def health_check() -> HealthResponse:
    """Return a fixed status payload for liveness probes."""
    return HealthResponse(status=HealthStatus.OK)
