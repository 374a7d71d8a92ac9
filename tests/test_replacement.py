from __future__ import annotations

from tokenfield.buffer import Span, SpannedText, TextBuffer
from tokenfield.engine import AutoCompleteEngine, replace_active_token
from tokenfield.tokenizers import SingleCharTokenizer


def test_replaces_active_token_with_terminated_suggestion() -> None:
    buffer = TextBuffer(SpannedText("highway;resi").with_span(0, 7, style="bold"), cursor=12)

    marker = replace_active_token(buffer, SingleCharTokenizer(), "residential")

    assert buffer.text == "highway;residential;"
    assert buffer.spans == (Span(0, 7, {"style": "bold"}),)
    assert (marker.start, marker.end) == (8, 20)
    assert marker.original == "resi"
    assert marker.replacement == "residential;"
    assert buffer.selection_end() == 20


def test_rereading_replaced_range_yields_terminated_suggestion() -> None:
    tokenizer = SingleCharTokenizer()
    buffer = TextBuffer("primary; se", cursor=11)

    marker = replace_active_token(buffer, tokenizer, "service")

    assert buffer.read(marker.start, marker.end) == tokenizer.terminate_token("service")
    assert buffer.text == "primary; service;"


def test_already_terminated_suggestion_is_not_doubled() -> None:
    buffer = TextBuffer("tr", cursor=2)

    replace_active_token(buffer, SingleCharTokenizer(), "track;")

    assert buffer.text == "track;"


def test_text_after_cursor_is_untouched() -> None:
    buffer = TextBuffer("pri;service", cursor=3)

    marker = replace_active_token(buffer, SingleCharTokenizer(), "primary")

    assert buffer.text == "primary;;service"
    assert marker.original == "pri"


def test_untokenized_engine_replaces_whole_buffer() -> None:
    buffer = TextBuffer("resi", cursor=2)
    engine = AutoCompleteEngine(buffer)

    marker = engine.set_or_replace_text("residential")

    assert marker is None
    assert buffer.text == "residential"
    assert buffer.selection_end() == 11


def test_immediate_backspace_reverts_completion() -> None:
    buffer = TextBuffer("highway;resi", cursor=12)
    engine = AutoCompleteEngine(buffer, tokenizer=SingleCharTokenizer())
    engine.set_or_replace_text("residential")

    assert engine.handle_backspace() is True
    assert buffer.text == "highway;resi"
    assert buffer.selection_end() == 12
    assert engine.handle_backspace() is False


def test_backspace_after_another_edit_is_ordinary() -> None:
    buffer = TextBuffer("highway;resi", cursor=12)
    engine = AutoCompleteEngine(buffer, tokenizer=SingleCharTokenizer())
    engine.set_or_replace_text("residential")

    engine.on_text_changed("highway;residential;x", 21)

    assert engine.last_substitution is None
    assert engine.handle_backspace() is False
    assert buffer.text == "highway;residential;x"


def test_backspace_after_cursor_move_is_ordinary() -> None:
    buffer = TextBuffer("highway;resi", cursor=12)
    engine = AutoCompleteEngine(buffer, tokenizer=SingleCharTokenizer())
    engine.set_or_replace_text("residential")

    engine.on_selection_changed(3)

    assert engine.handle_backspace() is False
