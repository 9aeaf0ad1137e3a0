"""
Spell-check request coordinator.

Owns the request lifecycle (idle -> loading -> succeeded/failed) for a single
client and serializes submissions: only one request may be in flight, and a
submission identical to the previous one is ignored while that one
stands as a success.

Usage:
    coordinator = SpellCheckCoordinator(create_spellcheck_services())
    unsubscribe = coordinator.subscribe(render)
    coordinator.submit("안녕하세요", SpellCheckEngine.NAVER)
"""
import asyncio
from typing import Callable, List, Mapping, Optional, Union

from matchumbeop.config import settings
from matchumbeop.schemas.spellcheck import (
    FailedState,
    IdleState,
    LoadingState,
    RequestState,
    SpellCheckEngine,
    SpellCheckRequest,
    SpellCheckSuccess,
    SucceededState,
)
from matchumbeop.services.spellcheck import resolve_engine
from matchumbeop.services.spellcheck_base import (
    DEFAULT_ERROR_MESSAGE,
    SpellCheckError,
    SpellCheckService,
)
from matchumbeop.utils.logger import get_logger

logger = get_logger("services.spellcheck_coordinator")

StateListener = Callable[[RequestState], None]

# Fraction of the remaining distance to the ceiling covered by each progress tick
PROGRESS_STEP = 0.15


class SpellCheckCoordinator:
    """
    Coordinates spell-check submissions and exposes their state.

    State changes happen on the event loop that calls submit(), so the
    loading check and the transition to loading cannot interleave with
    another submission. The remote call runs in its own task and always
    runs to completion; cancellation is not supported.
    """

    def __init__(
        self,
        services: Mapping[SpellCheckEngine, SpellCheckService],
        default_engine: Union[str, SpellCheckEngine, None] = None,
        text_limit: Optional[int] = None,
        progress_interval: Optional[float] = None,
        progress_ceiling: Optional[float] = None,
    ):
        """
        Initialize the coordinator.

        Args:
            services: Spell-check service per engine
            default_engine: Engine used when submit() gets none (default from config)
            text_limit: Maximum characters per submission (default from config)
            progress_interval: Seconds between progress ticks (default from config)
            progress_ceiling: Highest progress reported while loading (default from config)
        """
        self._services = dict(services)
        self.default_engine = resolve_engine(default_engine)
        self.text_limit = text_limit or settings.SPELLCHECK_TEXT_LIMIT
        self.progress_interval = progress_interval or settings.SPELLCHECK_PROGRESS_INTERVAL
        self.progress_ceiling = progress_ceiling or settings.SPELLCHECK_PROGRESS_CEILING

        self._state: RequestState = IdleState()
        self._text = ""
        self._last_completed: Optional[SpellCheckRequest] = None
        self._listeners: List[StateListener] = []
        self._task: Optional[asyncio.Task] = None

        logger.info(
            "SpellCheckCoordinator initialized",
            engines=",".join(engine.value for engine in self._services),
            default_engine=self.default_engine.value,
            text_limit=self.text_limit,
        )

    @property
    def text(self) -> str:
        """Text of the last accepted submission."""
        return self._text

    @property
    def progress(self) -> float:
        """Progress indicator between 0.0 and 1.0."""
        return self._state.progress

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, LoadingState)

    def current_state(self) -> RequestState:
        """Return the latest state."""
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener called with every new state.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def submit(
        self,
        text: Optional[str],
        engine: Union[str, SpellCheckEngine, None] = None,
    ) -> Optional[asyncio.Task]:
        """
        Submit text for checking.

        Silently ignored while a request is loading, when the text is blank,
        when the engine name is not supported, or when (text, engine) matches
        the last submission and that submission succeeded. Text longer than
        text_limit is truncated first.

        Must be called from a running event loop.

        Args:
            text: Text to check
            engine: Engine to use (defaults to default_engine)

        Returns:
            Task running the request (never raises), or None if ignored
        """
        try:
            engine = resolve_engine(engine or self.default_engine)
        except ValueError as e:
            logger.warning("Submission ignored, unsupported engine", error=str(e))
            return None
        text = (text or "")[: self.text_limit]

        if self.is_loading:
            logger.debug("Submission ignored, request already in flight")
            return None

        if not text.strip():
            logger.debug("Submission ignored, text is blank")
            return None

        request = SpellCheckRequest(text=text, engine=engine)
        if request == self._last_completed:
            logger.debug("Submission ignored, identical to last completed request")
            return None

        self._text = text
        self._last_completed = None
        self._set_state(LoadingState(request=request))
        logger.info("Spell-check submitted", engine=engine.value, length=len(text))

        self._task = asyncio.create_task(self._run(request))
        return self._task

    async def join(self) -> None:
        """Wait for the in-flight request, if any, to finish."""
        if self._task is not None and not self._task.done():
            await asyncio.shield(self._task)

    async def aclose(self) -> None:
        """Wait for the in-flight request and release engine resources."""
        await self.join()
        for service in self._services.values():
            await service.aclose()

    async def _run(self, request: SpellCheckRequest) -> None:
        ticker = asyncio.create_task(self._tick_progress(request))
        try:
            service = self._services.get(request.engine)
            if service is None:
                raise SpellCheckError(
                    f"사용할 수 없는 맞춤법 검사기입니다: {request.engine.value}",
                    engine=request.engine,
                )
            corrected = await service.check_text(request.text)

        except SpellCheckError as e:
            logger.warning("Spell-check failed", engine=request.engine.value, error=e.message)
            state = FailedState(request=request, message=e.message)
        except Exception as e:
            logger.error(
                "Unexpected spell-check failure",
                engine=request.engine.value,
                error=str(e),
                exc_info=True,
            )
            state = FailedState(request=request, message=DEFAULT_ERROR_MESSAGE)
        else:
            state = SucceededState(request=request, result=SpellCheckSuccess(corrected=corrected))
            self._last_completed = request
            logger.info(
                "Spell-check succeeded",
                engine=request.engine.value,
                errata_count=corrected.errata_count,
            )
        finally:
            ticker.cancel()

        self._set_state(state)

    async def _tick_progress(self, request: SpellCheckRequest) -> None:
        """Raise loading progress toward the ceiling until the request finishes."""
        progress = 0.0
        while True:
            await asyncio.sleep(self.progress_interval)
            state = self._state
            if not isinstance(state, LoadingState) or state.request != request:
                return
            progress += (self.progress_ceiling - progress) * PROGRESS_STEP
            self._set_state(LoadingState(request=request, progress=progress))

    def _set_state(self, state: RequestState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error("State listener failed", error=str(e), exc_info=True)
