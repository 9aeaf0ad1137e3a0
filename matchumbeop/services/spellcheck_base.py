"""
Abstract base class for spell-check services.
"""
from abc import ABC, abstractmethod
from typing import Optional

from matchumbeop.schemas.spellcheck import CorrectedText, SpellCheckEngine

# Shown when an engine fails without a provider message
DEFAULT_ERROR_MESSAGE = "맞춤법 검사 중 오류가 발생했습니다. 잠시 후 다시 시도해 주세요."


class SpellCheckError(Exception):
    """
    Spell-check failure carrying a message suitable for display.

    Attributes:
        message: Human-readable error message
        engine: Engine that failed (if known)
    """

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGE, engine: Optional[SpellCheckEngine] = None):
        super().__init__(message)
        self.message = message
        self.engine = engine


class SpellCheckService(ABC):
    """
    Abstract base class for remote spell-check engines.

    Implementations send text to a provider and turn its markup into
    CorrectedText segments.
    """

    @abstractmethod
    async def check_text(self, text: str) -> CorrectedText:
        """
        Check text and return the corrected version.

        Args:
            text: Text to check

        Returns:
            CorrectedText with highlighted corrections

        Raises:
            SpellCheckError: On network, provider or parse failures
        """
        pass

    @abstractmethod
    def get_engine(self) -> SpellCheckEngine:
        """Get the engine this service talks to."""
        pass

    async def aclose(self) -> None:
        """Release network resources."""
        return None
