"""
Pydantic schemas for spell-check state, analytics events and API models.
"""
from matchumbeop.schemas.analytics import (
    AnalyticsEvent,
    ApplicationKind,
    SpellChecked,
    SpellCheckMethod,
    TextCopied,
)
from matchumbeop.schemas.spellcheck import (
    CorrectedText,
    CorrectionKind,
    FailedState,
    IdleState,
    LoadingState,
    RequestState,
    SpellCheckEngine,
    SpellCheckFailure,
    SpellCheckRequest,
    SpellCheckResult,
    SpellCheckSuccess,
    SucceededState,
    TextSegment,
)

__all__ = [
    "AnalyticsEvent",
    "ApplicationKind",
    "SpellChecked",
    "SpellCheckMethod",
    "TextCopied",
    "CorrectedText",
    "CorrectionKind",
    "FailedState",
    "IdleState",
    "LoadingState",
    "RequestState",
    "SpellCheckEngine",
    "SpellCheckFailure",
    "SpellCheckRequest",
    "SpellCheckResult",
    "SpellCheckSuccess",
    "SucceededState",
    "TextSegment",
]
