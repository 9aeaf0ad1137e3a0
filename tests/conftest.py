"""
Pytest configuration and fixtures for spell-check service tests.
"""
from typing import AsyncGenerator
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient, ASGITransport

from matchumbeop.main import app
from matchumbeop.schemas.analytics import ApplicationKind
from matchumbeop.schemas.spellcheck import SpellCheckEngine
from matchumbeop.services.analytics import AnalyticsDispatcher
from matchumbeop.services.spellcheck_coordinator import SpellCheckCoordinator
from tests.stubs import RecordingSink, StubSpellCheckService

# Long enough that no progress tick fires during a unit test
NO_PROGRESS_TICKS = 60.0


@pytest.fixture
def naver_stub() -> StubSpellCheckService:
    return StubSpellCheckService(SpellCheckEngine.NAVER)


@pytest.fixture
def daum_stub() -> StubSpellCheckService:
    return StubSpellCheckService(SpellCheckEngine.DAUM)


@pytest.fixture
def coordinator(naver_stub, daum_stub) -> SpellCheckCoordinator:
    """Coordinator wired to stub engines, defaulting to Naver."""
    return SpellCheckCoordinator(
        {SpellCheckEngine.NAVER: naver_stub, SpellCheckEngine.DAUM: daum_stub},
        default_engine=SpellCheckEngine.NAVER,
        text_limit=1800,
        progress_interval=NO_PROGRESS_TICKS,
    )


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def analytics(recording_sink) -> AnalyticsDispatcher:
    return AnalyticsDispatcher([ApplicationKind.MATCHUMBEOP], sinks=[recording_sink])


@pytest.fixture
async def client(coordinator, analytics) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async test client for the FastAPI application.

    ASGITransport does not run the lifespan handler, so the stub-backed
    coordinator and dispatcher are placed on app.state directly.
    """
    app.state.coordinator = coordinator
    app.state.analytics = analytics

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    await coordinator.join()
    app.state.coordinator = None
    app.state.analytics = None


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient with proper context manager support."""
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client_class.return_value = mock_client
        mock_client.__aenter__.return_value = mock_client
        mock_client.__aexit__.return_value = None
        yield mock_client
