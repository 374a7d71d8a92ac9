"""Validation pass: repair or drop every token of the buffer, right to left."""

from __future__ import annotations

from tokenfield.buffer import TextBuffer, plain
from tokenfield.runtime import telemetry
from tokenfield.tokenizers import Tokenizer

from .base import ValidationReport
from .capabilities import Validator


def validate_tokens(
    buffer: TextBuffer,
    tokenizer: Tokenizer,
    validator: Validator,
    *,
    logger_name: str | None = None,
) -> ValidationReport:
    """Validate each delimited token of ``buffer`` independently.

    Segments are located once on the text as it stands, then visited from the
    last one to the first so that an edit never moves a segment that is still
    to be visited. For each segment the token is read from the first
    non-space character up to its terminator:

    * a blank token is deleted together with its terminator;
    * an invalid token is replaced with ``terminate_token(fix_text(token))``,
      or deleted when the fix is blank;
    * a valid token keeps its text, and its segment is rewritten only when it
      differs from ``terminate_token(token)``.
    """

    report = ValidationReport()
    source = buffer.content
    segments = tokenizer.segments(source)
    with telemetry.span(
        "engine::validate_tokens",
        logger_name=logger_name,
        component="validation",
        metadata={"buffer": buffer.name, "segments": len(segments)},
    ):
        for segment in reversed(segments):
            start = tokenizer.find_token_start(source, segment.content_end)
            token = source[start : segment.content_end]
            current = source.text[segment.start : segment.end]

            if not token.text.strip():
                if current:
                    buffer.replace(segment.start, segment.end, "", label="validation_delete")
                    report.deleted += 1
                continue

            if validator.is_valid(token.text):
                replacement = tokenizer.terminate_token(token)
                if plain(replacement) != current:
                    buffer.replace(
                        segment.start, segment.end, replacement, label="validation_normalize"
                    )
                    report.normalized += 1
                continue

            fixed = validator.fix_text(token.text)
            if not str(fixed).strip():
                buffer.replace(segment.start, segment.end, "", label="validation_delete")
                report.deleted += 1
            else:
                buffer.replace(
                    segment.start,
                    segment.end,
                    tokenizer.terminate_token(fixed),
                    label="validation_fix",
                )
                report.fixed += 1

    report.text = buffer.text
    if report.changed:
        telemetry.record_event(
            "validation.pass",
            level="debug",
            data={"deleted": report.deleted, "fixed": report.fixed, "normalized": report.normalized},
            logger_name=logger_name,
        )
    return report


def validate_whole_text(
    buffer: TextBuffer, validator: Validator, *, logger_name: str | None = None
) -> ValidationReport:
    """Untokenized fields: swap the whole text for its fix when invalid."""

    report = ValidationReport()
    with telemetry.span(
        "engine::validate_text",
        logger_name=logger_name,
        component="validation",
        metadata={"buffer": buffer.name},
    ):
        if not validator.is_valid(buffer.text):
            buffer.set_text(validator.fix_text(buffer.text))
            report.fixed = 1
    report.text = buffer.text
    return report


__all__ = ["validate_tokens", "validate_whole_text"]
