"""
Analytics event variants.

Every event carries the application it belongs to so the dispatcher can
decide whether to forward it without inspecting the event's class.
"""
from enum import Enum
from typing import ClassVar, Dict, Union

from pydantic import BaseModel, ConfigDict, Field

ParameterValue = Union[str, int, float, bool]


class ApplicationKind(str, Enum):
    """Application an event was raised by."""
    MATCHUMBEOP = "matchumbeop"
    MACHUMBUB = "machumbub"


class SpellCheckMethod(str, Enum):
    """How a spell check was triggered."""
    IN_APP = "in_app"
    SERVICE = "service"


class AnalyticsEvent(BaseModel):
    """Base class for analytics events."""

    model_config = ConfigDict(frozen=True)

    name: ClassVar[str]

    application: ApplicationKind = ApplicationKind.MATCHUMBEOP

    @property
    def parameters(self) -> Dict[str, ParameterValue]:
        return {}


class TextCopied(AnalyticsEvent):
    """Corrected text was copied to the clipboard."""

    name: ClassVar[str] = "text_copied"


class SpellChecked(AnalyticsEvent):
    """A spell check completed."""

    name: ClassVar[str] = "spell_checked"

    method: SpellCheckMethod
    length: int = Field(ge=0)

    @property
    def parameters(self) -> Dict[str, ParameterValue]:
        return {"method": self.method.value, "length": self.length}


def text_copied(application: ApplicationKind = ApplicationKind.MATCHUMBEOP) -> TextCopied:
    return TextCopied(application=application)


def spell_checked(
    method: SpellCheckMethod,
    length: int,
    application: ApplicationKind = ApplicationKind.MATCHUMBEOP,
) -> SpellChecked:
    return SpellChecked(method=method, length=length, application=application)
