"""Health check endpoint."""

from fastapi import APIRouter

from newsdesk import __version__
from newsdesk.api.models.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status."""
    return HealthResponse(status="healthy", version=__version__)
