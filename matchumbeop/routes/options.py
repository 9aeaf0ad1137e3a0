"""
API route listing spell-check engines and limits.
"""
from fastapi import APIRouter, Depends

from matchumbeop.config import SPELLCHECK_ENGINE_OPTIONS
from matchumbeop.dependencies import get_coordinator
from matchumbeop.schemas.health import EngineInfo, SpellCheckOptionsResponse
from matchumbeop.schemas.spellcheck import SpellCheckEngine
from matchumbeop.services.spellcheck_coordinator import SpellCheckCoordinator

router = APIRouter(prefix="/api/v1", tags=["Options"])


@router.get("/options", response_model=SpellCheckOptionsResponse)
async def get_options(
    coordinator: SpellCheckCoordinator = Depends(get_coordinator),
) -> SpellCheckOptionsResponse:
    """
    Get available engines, the default engine and the text limit.

    Clients use this to render the engine picker and character counter.
    """
    return SpellCheckOptionsResponse(
        default_engine=coordinator.default_engine,
        engines=[
            EngineInfo(id=engine, name=SPELLCHECK_ENGINE_OPTIONS[engine.value]["name"])
            for engine in SpellCheckEngine
        ],
        text_limit=coordinator.text_limit,
    )
