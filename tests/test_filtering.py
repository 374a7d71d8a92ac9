from __future__ import annotations

import pytest

from tokenfield.engine import (
    active_token_span,
    enough_to_filter,
    normalize_threshold,
)
from tokenfield.tokenizers import SingleCharTokenizer


def test_short_active_token_does_not_filter() -> None:
    tokenizer = SingleCharTokenizer()

    assert enough_to_filter(tokenizer, "highway;re", 10, 3) is False
    assert enough_to_filter(tokenizer, "highway;re", 10, 2) is True


def test_leading_spaces_do_not_count_towards_threshold() -> None:
    tokenizer = SingleCharTokenizer()

    assert enough_to_filter(tokenizer, "highway;   r", 12, 2) is False
    assert active_token_span(tokenizer, "highway;   r", 12) == (11, 12)


def test_negative_cursor_fails_closed() -> None:
    assert enough_to_filter(SingleCharTokenizer(), "highway", -1, 1) is False
    assert enough_to_filter(None, "highway", -1, 1) is False


def test_cursor_past_end_is_clamped() -> None:
    tokenizer = SingleCharTokenizer()

    assert enough_to_filter(tokenizer, "a;bcd", 40, 3) is True
    assert active_token_span(tokenizer, "a;bcd", 40) == (2, 5)


def test_untokenized_gate_uses_whole_text() -> None:
    assert enough_to_filter(None, "a;b", 1, 3) is True
    assert enough_to_filter(None, "ab", 2, 3) is False
    assert active_token_span(None, "a;b", 1) == (0, 3)


def test_active_span_ends_at_cursor_not_token_end() -> None:
    tokenizer = SingleCharTokenizer()
    text = "highway;residential; unclassified"

    assert active_token_span(tokenizer, text, 12) == (8, 12)
    assert tokenizer.find_token_end(text, 12) == 19


@pytest.mark.parametrize(("value", "expected"), [(0, 1), (-3, 1), (1, 1), (4, 4)])
def test_threshold_is_at_least_one(value: int, expected: int) -> None:
    assert normalize_threshold(value) == expected
