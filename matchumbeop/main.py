"""
Main FastAPI application for the Matchumbeop spell-check service.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from matchumbeop.config import settings
from matchumbeop.routes import health, options, spellcheck
from matchumbeop.middleware.logging import RequestLoggingMiddleware
from matchumbeop.services.analytics import create_analytics_dispatcher
from matchumbeop.services.spellcheck import create_spellcheck_services
from matchumbeop.services.spellcheck_coordinator import SpellCheckCoordinator
from matchumbeop.utils.logger import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the coordinator and analytics dispatcher and stores them on
    app.state for injection into routes.
    """
    logger.info("Starting Matchumbeop spell-check service")
    logger.info(f"Environment: {'DEBUG' if settings.DEBUG else 'PRODUCTION'}")

    # Configuration errors are fatal - the app cannot serve requests without them
    try:
        app.state.coordinator = SpellCheckCoordinator(create_spellcheck_services())
        app.state.analytics = create_analytics_dispatcher()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        raise RuntimeError(str(e)) from e

    logger.info(f"Default spell-check engine: {app.state.coordinator.default_engine.value}")

    yield

    logger.info("Shutting down Matchumbeop spell-check service")
    await app.state.coordinator.aclose()
    await app.state.analytics.aclose()
    app.state.coordinator = None
    app.state.analytics = None


app = FastAPI(
    title="Matchumbeop",
    description="Korean spell-check service backed by remote spell-check engines",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(health.router, tags=["Health"])
app.include_router(options.router)
app.include_router(spellcheck.router)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint redirect to docs."""
    return {
        "message": "Matchumbeop spell-check service",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "matchumbeop.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
