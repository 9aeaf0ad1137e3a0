"""
FastAPI dependencies exposing the services created at startup.
"""
from fastapi import HTTPException, Request, status

from matchumbeop.services.analytics import AnalyticsDispatcher
from matchumbeop.services.spellcheck_coordinator import SpellCheckCoordinator


def get_coordinator(request: Request) -> SpellCheckCoordinator:
    """Return the coordinator stored on app.state by the lifespan handler."""
    coordinator = getattr(request.app.state, "coordinator", None)
    if coordinator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Spell-check service is not initialized"
        )
    return coordinator


def get_analytics(request: Request) -> AnalyticsDispatcher:
    """Return the analytics dispatcher stored on app.state by the lifespan handler."""
    analytics = getattr(request.app.state, "analytics", None)
    if analytics is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Analytics service is not initialized"
        )
    return analytics
