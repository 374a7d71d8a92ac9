from __future__ import annotations

import pytest

from tokenfield.buffer import Span, SpannedText


def test_replace_keeps_prefix_spans_and_drops_replaced_ones() -> None:
    text = (
        SpannedText("highway;resi")
        .with_span(0, 7, style="bold")
        .with_span(8, 12, style="italic")
    )

    result = text.replace(8, 12, "residential;")

    assert result.text == "highway;residential;"
    assert result.spans == (Span(0, 7, {"style": "bold"}),)


def test_replace_shifts_spans_after_range() -> None:
    text = SpannedText("ab;cd").with_span(3, 5, tag="tail")

    result = text.replace(0, 2, "xyz")

    assert result.text == "xyz;cd"
    assert result.spans == (Span(4, 6, {"tag": "tail"}),)


def test_replace_clips_straddling_span_to_outside_parts() -> None:
    text = SpannedText("abcdef").with_span(1, 5, tag="x")

    result = text.replace(2, 4, "XYZ")

    assert result.text == "abXYZef"
    assert result.spans == (Span(1, 2, {"tag": "x"}), Span(5, 6, {"tag": "x"}))


def test_replace_rebases_spans_of_incoming_text() -> None:
    incoming = SpannedText("road").with_span(0, 4, tag="new")

    result = SpannedText("a;b").replace(2, 3, incoming)

    assert result.text == "a;road"
    assert result.spans == (Span(2, 6, {"tag": "new"}),)


def test_slicing_clips_spans() -> None:
    text = SpannedText("highway").with_span(2, 6, tag="x")

    piece = text[4:7]

    assert isinstance(piece, SpannedText)
    assert piece.text == "way"
    assert piece.spans == (Span(0, 2, {"tag": "x"}),)
    assert text[0] == "h"


def test_copy_spans_from_rebases_onto_destination() -> None:
    source = SpannedText("xxabc").with_span(2, 5, tag="s")

    result = SpannedText("abc;").copy_spans_from(source, 2, 5, 0)

    assert result.spans == (Span(0, 3, {"tag": "s"}),)


def test_spans_must_fit_text() -> None:
    with pytest.raises(ValueError):
        SpannedText("ab", (Span(0, 3),))
    with pytest.raises(ValueError):
        Span(2, 1)
