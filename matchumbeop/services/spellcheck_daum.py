"""
Daum spell-check service.

Posts the sentence to Daum's grammar checker page and reads the corrections
from the ``txt_spell`` anchors in the returned html.
"""
import time
from typing import List, Optional, Tuple

import httpx
from bs4 import BeautifulSoup

from matchumbeop.config import settings
from matchumbeop.schemas.spellcheck import (
    CorrectedText,
    CorrectionKind,
    SpellCheckEngine,
    TextSegment,
)
from matchumbeop.services.spellcheck_base import SpellCheckError, SpellCheckService
from matchumbeop.utils.logger import get_logger
from matchumbeop.utils.text_chunking import create_chunks

logger = get_logger("services.spellcheck_daum")

ERROR_TYPES = {
    "spell": CorrectionKind.SPELLING,
    "space_spell": CorrectionKind.SPELLING,
    "space": CorrectionKind.SPACING,
    "doubt": CorrectionKind.STANDARD,
    "stat": CorrectionKind.STATISTICAL,
}


def extract_daum_corrections(html: str) -> List[Tuple[str, str, CorrectionKind]]:
    """
    Read (input, output, kind) triples from the grammar checker page.

    Args:
        html: Response body of grammar_checker.do

    Returns:
        Corrections in the order they appear in the text
    """
    soup = BeautifulSoup(html, "html.parser")
    corrections = []
    for anchor in soup.select("a.txt_spell"):
        original = anchor.get("data-error-input")
        corrected = anchor.get("data-error-output")
        if not original or corrected is None:
            continue
        kind = ERROR_TYPES.get(anchor.get("data-error-type", ""), CorrectionKind.SPELLING)
        corrections.append((original, corrected, kind))
    return corrections


def apply_corrections(
    text: str,
    corrections: List[Tuple[str, str, CorrectionKind]],
) -> CorrectedText:
    """
    Replace each reported input in order and build highlighted segments.

    Inputs that cannot be found after the previous replacement are skipped.
    """
    segments: List[TextSegment] = []
    cursor = 0

    for original, corrected, kind in corrections:
        index = text.find(original, cursor)
        if index < 0:
            logger.debug("Daum correction not found in text, skipping", error_input=original)
            continue
        if index > cursor:
            segments.append(TextSegment(text=text[cursor:index]))
        segments.append(TextSegment(text=corrected, highlight=kind, original=original))
        cursor = index + len(original)

    if cursor < len(text):
        segments.append(TextSegment(text=text[cursor:]))

    return CorrectedText(segments=segments)


class DaumSpellCheckService(SpellCheckService):
    """Spell-check service backed by Daum's grammar checker."""

    def __init__(
        self,
        speller_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_chunk_length: Optional[int] = None,
    ):
        self.speller_url = speller_url or settings.DAUM_SPELLER_URL
        self.timeout = timeout or settings.SPELLCHECK_TIMEOUT_SECONDS
        self.max_chunk_length = max_chunk_length or settings.DAUM_MAX_CHUNK_LENGTH
        self.headers = {
            "User-Agent": settings.SPELLCHECK_USER_AGENT,
            "Referer": "https://dic.daum.net/",
        }

        logger.info(
            "DaumSpellCheckService initialized",
            speller_url=self.speller_url,
            max_chunk_length=self.max_chunk_length,
        )

    def get_engine(self) -> SpellCheckEngine:
        return SpellCheckEngine.DAUM

    async def check_text(self, text: str) -> CorrectedText:
        """
        Check text chunk by chunk and join the corrected chunks.

        Raises:
            SpellCheckError: If the grammar checker fails
        """
        chunks = create_chunks(text, max_chars=self.max_chunk_length)
        result = CorrectedText()
        start_time = time.time()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers) as client:
                for chunk in chunks:
                    if not chunk.strip():
                        result = result + CorrectedText.unchanged(chunk)
                        continue
                    response = await client.post(self.speller_url, data={"sentence": chunk})
                    response.raise_for_status()
                    result = result + apply_corrections(chunk, extract_daum_corrections(response.text))

        except httpx.TimeoutException as e:
            logger.error(f"Daum grammar checker timed out after {self.timeout}s")
            raise SpellCheckError(
                "맞춤법 검사 요청 시간이 초과되었습니다.", engine=self.get_engine()
            ) from e
        except httpx.HTTPStatusError as e:
            logger.error(f"Daum grammar checker HTTP error: {e.response.status_code}")
            raise SpellCheckError(
                f"맞춤법 검사 서버 오류입니다. (HTTP {e.response.status_code})",
                engine=self.get_engine(),
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Daum grammar checker request failed: {str(e)}")
            raise SpellCheckError(
                "맞춤법 검사 서버에 연결할 수 없습니다.", engine=self.get_engine()
            ) from e

        logger.info(
            "Daum spell-check completed",
            chunk_count=len(chunks),
            errata_count=result.errata_count,
            duration_ms=f"{(time.time() - start_time) * 1000:.2f}",
        )
        return result
