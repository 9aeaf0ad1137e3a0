"""
Unit tests for the Daum spell-check service.
"""
from unittest.mock import Mock

import httpx
import pytest

from matchumbeop.schemas.spellcheck import CorrectionKind, SpellCheckEngine, TextSegment
from matchumbeop.services.spellcheck_base import SpellCheckError
from matchumbeop.services.spellcheck_daum import (
    DaumSpellCheckService,
    apply_corrections,
    extract_daum_corrections,
)

GRAMMAR_PAGE = """
<div class="cont_spell">
  <a href="#none" class="txt_spell" data-error-type="spell"
     data-error-input="됬어요" data-error-output="됐어요" data-error-context="다 됬어요">됬어요</a>
  <a href="#none" class="txt_spell" data-error-type="space"
     data-error-input="할수" data-error-output="할 수" data-error-context="할수 있다">할수</a>
  <a href="#none" class="link_other">관련 없음</a>
</div>
"""


def html_response(body):
    return Mock(status_code=200, text=body, raise_for_status=Mock())


class TestDaumParsing:
    """Tests for correction extraction and application."""

    def test_extract_corrections(self):
        corrections = extract_daum_corrections(GRAMMAR_PAGE)

        assert corrections == [
            ("됬어요", "됐어요", CorrectionKind.SPELLING),
            ("할수", "할 수", CorrectionKind.SPACING),
        ]

    def test_extract_without_corrections(self):
        assert extract_daum_corrections("<div class='cont_spell'></div>") == []

    def test_unknown_error_type_defaults_to_spelling(self):
        html = '<a class="txt_spell" data-error-type="new" data-error-input="a" data-error-output="b"></a>'
        assert extract_daum_corrections(html) == [("a", "b", CorrectionKind.SPELLING)]

    def test_apply_corrections_in_order(self):
        corrected = apply_corrections(
            "다 됬어요. 할수 있다",
            [("됬어요", "됐어요", CorrectionKind.SPELLING), ("할수", "할 수", CorrectionKind.SPACING)],
        )

        assert corrected.segments == [
            TextSegment(text="다 "),
            TextSegment(text="됐어요", highlight=CorrectionKind.SPELLING, original="됬어요"),
            TextSegment(text=". "),
            TextSegment(text="할 수", highlight=CorrectionKind.SPACING, original="할수"),
            TextSegment(text=" 있다"),
        ]
        assert corrected.plain_text == "다 됐어요. 할 수 있다"

    def test_apply_skips_missing_input(self):
        corrected = apply_corrections("그대로", [("없는말", "있는말", CorrectionKind.SPELLING)])

        assert corrected.plain_text == "그대로"
        assert corrected.errata_count == 0

    def test_repeated_input_is_matched_after_previous(self):
        corrected = apply_corrections(
            "됬다 됬다",
            [("됬다", "됐다", CorrectionKind.SPELLING), ("됬다", "됐다", CorrectionKind.SPELLING)],
        )

        assert corrected.plain_text == "됐다 됐다"
        assert corrected.errata_count == 2


class TestDaumSpellCheckService:
    """Test suite for DaumSpellCheckService."""

    @pytest.fixture
    def service(self):
        return DaumSpellCheckService(speller_url="https://daum.test/grammar_checker.do", timeout=5)

    def test_engine(self, service):
        assert service.get_engine() == SpellCheckEngine.DAUM

    @pytest.mark.asyncio
    async def test_check_text_success(self, service, mock_httpx_client):
        mock_httpx_client.post.return_value = html_response(GRAMMAR_PAGE)

        corrected = await service.check_text("다 됬어요. 할수 있다")

        assert corrected.plain_text == "다 됐어요. 할 수 있다"
        call_args = mock_httpx_client.post.call_args
        assert call_args[0][0] == "https://daum.test/grammar_checker.do"
        assert call_args[1]["data"] == {"sentence": "다 됬어요. 할수 있다"}

    @pytest.mark.asyncio
    async def test_http_error(self, service, mock_httpx_client):
        mock_response = Mock()
        mock_response.status_code = 500
        mock_httpx_client.post.return_value = Mock(
            raise_for_status=Mock(side_effect=httpx.HTTPStatusError(
                "500 Server Error", request=Mock(), response=mock_response
            ))
        )

        with pytest.raises(SpellCheckError, match="HTTP 500") as exc_info:
            await service.check_text("텍스트")

        assert exc_info.value.engine == SpellCheckEngine.DAUM

    @pytest.mark.asyncio
    async def test_timeout(self, service, mock_httpx_client):
        mock_httpx_client.post.side_effect = httpx.TimeoutException("Request timed out")

        with pytest.raises(SpellCheckError, match="시간이 초과"):
            await service.check_text("텍스트")

    @pytest.mark.asyncio
    async def test_whitespace_chunk_is_not_sent(self, mock_httpx_client):
        service = DaumSpellCheckService(speller_url="https://daum.test/grammar_checker.do")

        corrected = await service.check_text("   ")

        mock_httpx_client.post.assert_not_called()
        assert corrected.plain_text == "   "
