from __future__ import annotations

import pytest

from tokenfield.buffer import BufferValidationError, Span, SpannedText, TextBuffer


def test_replace_bumps_version_and_reports_delta() -> None:
    buffer = TextBuffer("highway;resi")

    delta = buffer.replace(8, 12, "residential;", label="complete")

    assert buffer.text == "highway;residential;"
    assert buffer.version == 1
    assert delta.removed == "resi"
    assert delta.inserted == "residential;"
    assert (delta.start, delta.end) == (8, 20)
    assert delta.length_delta == 8
    assert delta.label == "complete"


def test_cursor_defaults_to_end_and_is_clamped() -> None:
    buffer = TextBuffer("abc")
    assert buffer.selection_end() == 3

    assert buffer.set_cursor(10) == 3
    assert buffer.set_cursor(-4) == 0


@pytest.mark.parametrize(
    ("cursor", "expected"),
    [
        (0, 0),
        (2, 2),
        (3, 6),
        (5, 6),
        (7, 8),
    ],
)
def test_cursor_follows_replacement(cursor: int, expected: int) -> None:
    buffer = TextBuffer("ab;cd;e", cursor=cursor)

    buffer.replace(2, 5, "XXXX")

    assert buffer.text == "abXXXX;e"
    assert buffer.selection_end() == expected


def test_read_rejects_ranges_outside_buffer() -> None:
    buffer = TextBuffer("abc")

    with pytest.raises(BufferValidationError):
        buffer.read(2, 5)
    with pytest.raises(BufferValidationError):
        buffer.replace(2, 1, "x")


def test_set_text_replaces_content_and_spans() -> None:
    buffer = TextBuffer(SpannedText("old").with_span(0, 3, tag="x"))

    buffer.set_text("brand new")

    assert buffer.text == "brand new"
    assert buffer.spans == ()
    assert buffer.selection_end() == len("brand new")


def test_mirror_and_spanned_reads() -> None:
    buffer = TextBuffer(SpannedText("a;bc").with_span(2, 4, tag="x"), cursor=1, name="tags")

    mirror = buffer.mirror(attributes={"field": "highway"})
    piece = buffer.read_spanned(2, 4)

    assert mirror.text == "a;bc"
    assert mirror.cursor == 1
    assert mirror.attributes == {"field": "highway"}
    assert piece.spans == (Span(0, 2, {"tag": "x"}),)


def test_insert_and_delete_helpers() -> None:
    buffer = TextBuffer("ac", cursor=1)

    buffer.insert_text("b")
    assert buffer.text == "abc"
    assert buffer.selection_end() == 2

    buffer.delete_range(0, 1)
    assert buffer.text == "bc"
    assert buffer.version == 2
