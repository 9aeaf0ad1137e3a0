"""
Naver spell-check service.

Calls the speller proxy behind Naver search's spell-checker widget. The proxy
needs a short-lived passport key scraped from the search page; the key is
cached and refreshed once when the proxy rejects it.
"""
import re
import time
from typing import Any, Dict, List, Optional

import httpx
from bs4 import BeautifulSoup, NavigableString, Tag

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

logger = get_logger("services.spellcheck_naver")

PASSPORT_KEY_PATTERN = re.compile(r"passportKey=([a-zA-Z0-9]+)")

# Query used to load the search page that embeds the speller widget
PASSPORT_QUERY = "맞춤법 검사기"

# Colour classes in the proxy's html output
HIGHLIGHT_CLASSES = {
    "red_text": CorrectionKind.SPELLING,
    "green_text": CorrectionKind.SPACING,
    "violet_text": CorrectionKind.STANDARD,
    "blue_text": CorrectionKind.STATISTICAL,
}


def parse_naver_html(html: str) -> CorrectedText:
    """
    Convert the proxy's html field into segments.

    Args:
        html: Markup such as ``안녕 <em class='red_text'>하세요</em><br>``

    Returns:
        CorrectedText with one segment per highlighted or plain run
    """
    soup = BeautifulSoup(html, "html.parser")
    segments: List[TextSegment] = []

    def append(text: str, highlight: Optional[CorrectionKind] = None) -> None:
        if not text:
            return
        if highlight is None and segments and segments[-1].highlight is None:
            segments[-1] = TextSegment(text=segments[-1].text + text)
        else:
            segments.append(TextSegment(text=text, highlight=highlight))

    for node in soup.contents:
        if isinstance(node, NavigableString):
            append(str(node))
        elif isinstance(node, Tag):
            if node.name == "br":
                append("\n")
                continue
            highlight = None
            for css_class in node.get("class") or []:
                if css_class in HIGHLIGHT_CLASSES:
                    highlight = HIGHLIGHT_CLASSES[css_class]
                    break
            # Nested <br> inside a highlight still means a line break
            for br in node.find_all("br"):
                br.replace_with("\n")
            append(node.get_text(), highlight)

    return CorrectedText(segments=segments)


class NaverSpellCheckService(SpellCheckService):
    """Spell-check service backed by Naver's speller proxy."""

    def __init__(
        self,
        speller_url: Optional[str] = None,
        passport_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_chunk_length: Optional[int] = None,
    ):
        """
        Initialize Naver spell-check service.

        Args:
            speller_url: Speller proxy URL (default from config)
            passport_url: Search page URL used to obtain the passport key (default from config)
            timeout: Request timeout in seconds (default from config)
            max_chunk_length: Maximum characters per proxy query (default from config)
        """
        self.speller_url = speller_url or settings.NAVER_SPELLER_URL
        self.passport_url = passport_url or settings.NAVER_PASSPORT_URL
        self.timeout = timeout or settings.SPELLCHECK_TIMEOUT_SECONDS
        self.max_chunk_length = max_chunk_length or settings.NAVER_MAX_CHUNK_LENGTH
        self.headers = {
            "User-Agent": settings.SPELLCHECK_USER_AGENT,
            "Referer": "https://search.naver.com/",
        }
        self._passport_key: Optional[str] = None

        logger.info(
            "NaverSpellCheckService initialized",
            speller_url=self.speller_url,
            max_chunk_length=self.max_chunk_length,
        )

    def get_engine(self) -> SpellCheckEngine:
        return SpellCheckEngine.NAVER

    async def check_text(self, text: str) -> CorrectedText:
        """
        Check text chunk by chunk and join the corrected chunks.

        Raises:
            SpellCheckError: If the proxy fails or returns an error
        """
        chunks = create_chunks(text, max_chars=self.max_chunk_length)
        result = CorrectedText()
        start_time = time.time()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers) as client:
                for chunk in chunks:
                    result = result + await self._check_chunk(client, chunk)

        except SpellCheckError:
            raise
        except httpx.TimeoutException as e:
            logger.error(f"Naver speller request timed out after {self.timeout}s")
            raise SpellCheckError(
                "맞춤법 검사 요청 시간이 초과되었습니다.", engine=self.get_engine()
            ) from e
        except httpx.HTTPStatusError as e:
            logger.error(f"Naver speller HTTP error: {e.response.status_code}")
            raise SpellCheckError(
                f"맞춤법 검사 서버 오류입니다. (HTTP {e.response.status_code})",
                engine=self.get_engine(),
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Naver speller request failed: {str(e)}")
            raise SpellCheckError(
                "맞춤법 검사 서버에 연결할 수 없습니다.", engine=self.get_engine()
            ) from e
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Malformed Naver speller response: {str(e)}", exc_info=True)
            raise SpellCheckError(
                "맞춤법 검사 결과를 해석할 수 없습니다.", engine=self.get_engine()
            ) from e

        logger.info(
            "Naver spell-check completed",
            chunk_count=len(chunks),
            errata_count=result.errata_count,
            duration_ms=f"{(time.time() - start_time) * 1000:.2f}",
        )
        return result

    async def _check_chunk(self, client: httpx.AsyncClient, chunk: str) -> CorrectedText:
        """Check one chunk, refreshing the passport key once if the proxy rejects it."""
        if not chunk.strip():
            return CorrectedText.unchanged(chunk)

        data = await self._query(client, chunk, refresh_key=False)
        error = data.get("message", {}).get("error")
        if error:
            logger.warning("Naver speller rejected request, refreshing passport key", error=error)
            data = await self._query(client, chunk, refresh_key=True)
            error = data.get("message", {}).get("error")
            if error:
                raise SpellCheckError(error, engine=self.get_engine())

        html = data["message"]["result"]["html"]
        return parse_naver_html(html)

    async def _query(
        self,
        client: httpx.AsyncClient,
        chunk: str,
        refresh_key: bool,
    ) -> Dict[str, Any]:
        passport_key = await self._get_passport_key(client, refresh=refresh_key)
        response = await client.get(
            self.speller_url,
            params={
                "passportKey": passport_key,
                "q": chunk,
                "color_blindness": "0",
                "where": "nexearch",
            },
        )
        response.raise_for_status()
        return response.json()

    async def _get_passport_key(self, client: httpx.AsyncClient, refresh: bool = False) -> str:
        """
        Get the cached passport key, scraping a new one when needed.

        Raises:
            SpellCheckError: If the search page no longer embeds a key
        """
        if self._passport_key and not refresh:
            return self._passport_key

        response = await client.get(
            self.passport_url,
            params={"where": "nexearch", "query": PASSPORT_QUERY},
        )
        response.raise_for_status()

        match = PASSPORT_KEY_PATTERN.search(response.text)
        if not match:
            logger.error("Passport key not found on Naver search page")
            raise SpellCheckError(
                "네이버 맞춤법 검사기 인증 키를 가져올 수 없습니다.", engine=self.get_engine()
            )

        self._passport_key = match.group(1)
        logger.debug("Naver passport key refreshed")
        return self._passport_key
