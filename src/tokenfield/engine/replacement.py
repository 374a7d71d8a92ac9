"""Insertion engine: write a chosen suggestion over the active token."""

from __future__ import annotations

from typing import Optional

from tokenfield.buffer import SubstitutionMarker, TextBuffer, TextLike, plain
from tokenfield.runtime import telemetry
from tokenfield.tokenizers import Tokenizer


def replace_active_token(
    buffer: TextBuffer,
    tokenizer: Tokenizer,
    suggestion: TextLike,
    *,
    logger_name: str | None = None,
) -> SubstitutionMarker:
    """Replace ``[find_token_start(cursor), cursor)`` with the terminated suggestion.

    Text and spans outside that range are untouched; the returned marker
    describes the substitution so the host can undo it on an immediate
    backspace.
    """

    end = buffer.selection_end()
    start = tokenizer.find_token_start(buffer.content, end)
    original = buffer.read(start, end)
    replacement = tokenizer.terminate_token(suggestion)
    with telemetry.span(
        "engine::replace_token",
        logger_name=logger_name,
        component="replacement",
        metadata={"start": start, "end": end},
    ):
        delta = buffer.replace(start, end, replacement, label="replace_token")
    return SubstitutionMarker(
        start=start,
        end=delta.end,
        original=original,
        replacement=plain(replacement),
        version=delta.version,
    )


def replace_whole_text(buffer: TextBuffer, suggestion: TextLike) -> Optional[SubstitutionMarker]:
    buffer.set_text(plain(suggestion))
    return None


__all__ = ["replace_active_token", "replace_whole_text"]
