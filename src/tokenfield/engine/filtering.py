"""Filtering gate: is the token under the cursor long enough to query?"""

from __future__ import annotations

from typing import Optional, Tuple

from tokenfield.buffer.spans import TextLike
from tokenfield.buffer.validation import clamp_cursor
from tokenfield.tokenizers import Tokenizer

DEFAULT_THRESHOLD = 2


def normalize_threshold(threshold: int) -> int:
    return max(1, int(threshold))


def enough_to_filter(
    tokenizer: Optional[Tokenizer], text: TextLike, cursor: int, threshold: int
) -> bool:
    """True when the active token (or the whole text, untokenized) meets ``threshold``.

    A negative cursor means there is no selection and never filters.
    """

    if cursor < 0:
        return False
    if tokenizer is None:
        return len(text) >= threshold
    cursor = clamp_cursor(cursor, len(text))
    start = tokenizer.find_token_start(text, cursor)
    return cursor - start >= threshold


def active_token_span(
    tokenizer: Optional[Tokenizer], text: TextLike, cursor: int
) -> Tuple[int, int]:
    """``[start, cursor)`` as submitted to the suggestion source."""

    if tokenizer is None:
        return 0, len(text)
    cursor = clamp_cursor(cursor, len(text))
    return tokenizer.find_token_start(text, cursor), cursor


__all__ = [
    "DEFAULT_THRESHOLD",
    "normalize_threshold",
    "enough_to_filter",
    "active_token_span",
]
