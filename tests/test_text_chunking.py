"""
Unit tests for text chunking utility.
"""
import pytest

from matchumbeop.utils.text_chunking import create_chunks, split_into_sentences


class TestSplitIntoSentences:
    """Tests for split_into_sentences function."""

    def test_simple_sentences(self):
        text = "첫 문장입니다. 둘째 문장입니다. 셋째 문장입니다."
        sentences = split_into_sentences(text)
        assert sentences == ["첫 문장입니다. ", "둘째 문장입니다. ", "셋째 문장입니다."]

    def test_exclamation_and_question_marks(self):
        text = "정말요? 대단해요! 그렇군요."
        assert len(split_into_sentences(text)) == 3

    def test_newlines_are_boundaries(self):
        text = "첫 줄\n\n둘째 줄"
        assert split_into_sentences(text) == ["첫 줄\n\n", "둘째 줄"]

    def test_quoted_sentence(self):
        text = '그가 "안녕." 하고 말했다. 끝.'
        assert "".join(split_into_sentences(text)) == text

    def test_no_punctuation(self):
        text = "문장 부호가 없는 텍스트"
        assert split_into_sentences(text) == [text]

    def test_empty_text(self):
        assert split_into_sentences("") == []

    def test_decimal_point_is_not_a_boundary(self):
        text = "원주율은 3.14 입니다."
        assert split_into_sentences(text) == [text]


class TestCreateChunks:
    """Tests for create_chunks function."""

    def test_short_text_no_chunking(self):
        text = "짧은 텍스트입니다."
        assert create_chunks(text, max_chars=500) == [text]

    def test_exactly_at_threshold(self):
        text = "가" * 10
        assert create_chunks(text, max_chars=10) == [text]

    def test_empty_text(self):
        assert create_chunks("") == []

    def test_invalid_max_chars(self):
        with pytest.raises(ValueError, match="max_chars"):
            create_chunks("텍스트", max_chars=0)

    def test_respects_sentence_boundaries(self):
        text = "첫 문장입니다. 둘째 문장입니다. 셋째 문장입니다."
        chunks = create_chunks(text, max_chars=20)

        assert chunks == ["첫 문장입니다. 둘째 문장입니다. ", "셋째 문장입니다."]

    def test_chunks_restore_original_text(self):
        text = "맞춤법 검사를 합니다. " * 40 + "마지막 문장\n새 줄의 내용!"
        chunks = create_chunks(text, max_chars=50)

        assert "".join(chunks) == text
        assert all(len(chunk) <= 50 for chunk in chunks)

    def test_single_long_sentence_splits_at_spaces(self):
        text = "띄어쓰기 " * 10
        chunks = create_chunks(text, max_chars=12)

        assert "".join(chunks) == text
        assert all(len(chunk) <= 12 for chunk in chunks)
        assert all(chunk.endswith(" ") for chunk in chunks)

    def test_long_text_without_spaces_is_cut_hard(self):
        text = "가" * 25
        chunks = create_chunks(text, max_chars=10)

        assert chunks == ["가" * 10, "가" * 10, "가" * 5]
