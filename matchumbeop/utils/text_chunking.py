"""
Text chunking utilities for splitting long texts at sentence boundaries.

Used to keep each spell-check query under the provider's length limit.
Chunks are contiguous slices of the input, so joining them restores the
original text exactly.
"""
import logging
import re
from typing import List

logger = logging.getLogger(__name__)

# Sentence boundary: sentence-ending punctuation (optionally followed by a
# closing quote) and the whitespace after it, or any line break.
SENTENCE_END_PATTERN = re.compile(r'[.!?。](?:["\'”’])?\s+|\n+')


def split_into_sentences(text: str) -> List[str]:
    """
    Split text into sentences, keeping trailing punctuation and whitespace.

    Args:
        text: Input text to split

    Returns:
        List of sentences whose concatenation equals text
    """
    if not text:
        return []

    sentences = []
    start = 0
    for match in SENTENCE_END_PATTERN.finditer(text):
        sentences.append(text[start:match.end()])
        start = match.end()

    if start < len(text):
        sentences.append(text[start:])

    return sentences


def _hard_split(text: str, max_chars: int) -> List[str]:
    """Split a single oversized sentence, preferring the last space in each window."""
    pieces = []
    while len(text) > max_chars:
        cut = text.rfind(" ", 0, max_chars)
        if cut <= 0:
            cut = max_chars
        else:
            cut += 1
        pieces.append(text[:cut])
        text = text[cut:]
    if text:
        pieces.append(text)
    return pieces


def create_chunks(text: str, max_chars: int = 500) -> List[str]:
    """
    Split text into chunks that don't exceed max_chars.

    Strategy:
    1. Split text into sentences
    2. Group sentences into chunks without exceeding max_chars
    3. Sentences longer than max_chars are split at spaces

    Args:
        text: Input text to chunk
        max_chars: Maximum characters per chunk (default: 500)

    Returns:
        List of text chunks
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")

    if len(text) <= max_chars:
        return [text] if text else []

    chunks = []
    current = ""

    for sentence in split_into_sentences(text):
        if len(current) + len(sentence) <= max_chars:
            current += sentence
            continue

        if current:
            chunks.append(current)
            current = ""

        if len(sentence) > max_chars:
            pieces = _hard_split(sentence, max_chars)
            chunks.extend(pieces[:-1])
            current = pieces[-1]
        else:
            current = sentence

    if current:
        chunks.append(current)

    logger.debug(
        f"Text chunked (length={len(text)}, chunk_count={len(chunks)}, max_chars={max_chars})"
    )

    return chunks
