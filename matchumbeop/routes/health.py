"""
Health check endpoint for monitoring.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Request
from matchumbeop.schemas.health import HealthResponse
from matchumbeop.utils.logger import get_logger

logger = get_logger("health")
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check application and spell-check coordinator status",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Reports whether the spell-check coordinator is initialized and, if so,
    its current request status.
    """
    coordinator = getattr(request.app.state, "coordinator", None)
    if coordinator is None:
        logger.warning("Health check: coordinator not initialized")
        return HealthResponse(
            status="degraded",
            spellcheck="unavailable",
            timestamp=datetime.now(timezone.utc)
        )

    logger.debug("Health check: all systems operational")
    return HealthResponse(
        status="healthy",
        spellcheck=coordinator.current_state().status,
        timestamp=datetime.now(timezone.utc)
    )
