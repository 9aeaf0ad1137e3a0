"""
API routes for submitting text and reading spell-check state.
"""
import asyncio

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from matchumbeop.dependencies import get_analytics, get_coordinator
from matchumbeop.schemas.analytics import SpellCheckMethod, spell_checked, text_copied
from matchumbeop.schemas.spellcheck import (
    CopyResponse,
    SpellCheckStateResponse,
    SpellCheckSubmitRequest,
    SpellCheckSubmitResponse,
    SucceededState,
)
from matchumbeop.services.analytics import AnalyticsDispatcher
from matchumbeop.services.spellcheck_coordinator import SpellCheckCoordinator
from matchumbeop.utils.logger import get_logger

logger = get_logger("routes.spellcheck")

router = APIRouter(prefix="/api/v1/spellcheck", tags=["Spell-check"])


async def report_spell_checked(
    task: asyncio.Task,
    analytics: AnalyticsDispatcher,
    length: int,
) -> None:
    """Send SpellChecked once the submitted request finishes."""
    await task
    await analytics.send(spell_checked(SpellCheckMethod.IN_APP, length))


@router.post(
    "",
    response_model=SpellCheckSubmitResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Submit text for spell-checking",
)
async def submit_spellcheck(
    body: SpellCheckSubmitRequest,
    background_tasks: BackgroundTasks,
    coordinator: SpellCheckCoordinator = Depends(get_coordinator),
    analytics: AnalyticsDispatcher = Depends(get_analytics),
) -> SpellCheckSubmitResponse:
    """
    Submit text for checking.

    Returns immediately with the current state. Submissions made while a
    request is loading, with blank text, or identical to the last
    successful check are ignored and reported with accepted=false.
    """
    task = coordinator.submit(body.text, body.engine)

    if task is not None:
        background_tasks.add_task(report_spell_checked, task, analytics, len(coordinator.text))

    return SpellCheckSubmitResponse(
        accepted=task is not None,
        state=coordinator.current_state(),
    )


@router.get("/state", response_model=SpellCheckStateResponse)
async def get_spellcheck_state(
    coordinator: SpellCheckCoordinator = Depends(get_coordinator),
) -> SpellCheckStateResponse:
    """Get the current request state and progress."""
    return SpellCheckStateResponse(
        state=coordinator.current_state(),
        progress=coordinator.progress,
    )


@router.post(
    "/copy",
    response_model=CopyResponse,
    responses={409: {"description": "No corrected text available"}},
)
async def copy_result(
    coordinator: SpellCheckCoordinator = Depends(get_coordinator),
    analytics: AnalyticsDispatcher = Depends(get_analytics),
) -> CopyResponse:
    """
    Return the plain corrected text for the client clipboard.

    Records a TextCopied event.
    """
    state = coordinator.current_state()
    if not isinstance(state, SucceededState):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No corrected text available"
        )

    await analytics.send(text_copied())
    return CopyResponse(text=state.result.corrected.plain_text)
