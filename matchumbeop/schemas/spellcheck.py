"""
Pydantic schemas for spell-check functionality.
"""
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field


class SpellCheckEngine(str, Enum):
    """Remote spell-check provider."""
    NAVER = "naver"
    DAUM = "daum"


class CorrectionKind(str, Enum):
    """
    Category of a highlighted correction.

    Mirrors the colour classes used by the providers' markup
    (red, green, violet and blue text on Naver).
    """
    SPELLING = "spelling"
    SPACING = "spacing"
    STANDARD = "standard"
    STATISTICAL = "statistical"


class SpellCheckRequest(BaseModel):
    """A single submission. Two requests are the same work when text and engine match."""

    model_config = ConfigDict(frozen=True)

    text: str
    engine: SpellCheckEngine


class TextSegment(BaseModel):
    """A run of corrected text, highlighted when the provider changed it."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Segment text (may contain newlines)")
    highlight: Optional[CorrectionKind] = Field(
        default=None,
        description="Correction category, or null for unchanged text"
    )
    original: Optional[str] = Field(
        default=None,
        description="Text before correction, when the provider reports it"
    )


class CorrectedText(BaseModel):
    """Corrected text as ordered segments with highlighted diffs."""

    model_config = ConfigDict(frozen=True)

    segments: List[TextSegment] = Field(default_factory=list)

    @computed_field
    @property
    def plain_text(self) -> str:
        """Corrected text without markup."""
        return "".join(segment.text for segment in self.segments)

    @computed_field
    @property
    def errata_count(self) -> int:
        """Number of highlighted corrections."""
        return sum(1 for segment in self.segments if segment.highlight is not None)

    @classmethod
    def unchanged(cls, text: str) -> "CorrectedText":
        """Build a result with no corrections."""
        return cls(segments=[TextSegment(text=text)] if text else [])

    def __add__(self, other: "CorrectedText") -> "CorrectedText":
        return CorrectedText(segments=[*self.segments, *other.segments])


class SpellCheckSuccess(BaseModel):
    """Completed check carrying the corrected text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    corrected: CorrectedText


class SpellCheckFailure(BaseModel):
    """Completed check that failed with a human-readable message."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    message: str


SpellCheckResult = Annotated[
    Union[SpellCheckSuccess, SpellCheckFailure],
    Field(discriminator="kind"),
]


class IdleState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"

    @property
    def progress(self) -> float:
        return 0.0


class LoadingState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"
    request: SpellCheckRequest
    progress: float = Field(default=0.0, ge=0.0, le=1.0)


class SucceededState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["succeeded"] = "succeeded"
    request: SpellCheckRequest
    result: SpellCheckSuccess

    @property
    def progress(self) -> float:
        return 1.0


class FailedState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    request: SpellCheckRequest
    message: str

    @property
    def progress(self) -> float:
        return 1.0


RequestState = Annotated[
    Union[IdleState, LoadingState, SucceededState, FailedState],
    Field(discriminator="status"),
]


class SpellCheckSubmitRequest(BaseModel):
    """Request body for submitting text."""

    text: str = Field(..., description="Text to check")
    engine: Optional[SpellCheckEngine] = Field(
        default=None,
        description="Engine to use (defaults to SPELLCHECK_ENGINE)"
    )


class SpellCheckSubmitResponse(BaseModel):
    """Response for a submission; accepted is false when the submission was a no-op."""

    accepted: bool
    state: RequestState


class SpellCheckStateResponse(BaseModel):
    """Current coordinator state and the progress indicator."""

    state: RequestState
    progress: float


class CopyResponse(BaseModel):
    """Plain corrected text handed to the client clipboard."""

    text: str
