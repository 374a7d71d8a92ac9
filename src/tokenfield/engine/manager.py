"""Engine façade the host field drives with its text, cursor and focus events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from tokenfield.buffer import SubstitutionMarker, TextBuffer, TextLike, revert_substitution
from tokenfield.runtime import telemetry
from tokenfield.tokenizers import SingleCharTokenizer, Tokenizer

from .base import EngineHooks, EventBus, FilterOutcome, ValidationReport
from .capabilities import SuggestionSource, Validator
from .filtering import (
    DEFAULT_THRESHOLD,
    active_token_span,
    enough_to_filter,
    normalize_threshold,
)
from .replacement import replace_active_token, replace_whole_text
from .suggestions import QuerySequencer, QueryTicket
from .validation_pass import validate_tokens, validate_whole_text

if TYPE_CHECKING:
    from tokenfield.config import EngineConfig


class AutoCompleteEngine:
    """Autocomplete behaviour for one text field, single-value or list-style.

    With a tokenizer configured the field behaves as a delimited list: filtering,
    validation and completion act on the token under the cursor. Without one
    the whole text is the unit. Every call is synchronous and expects events
    for a given buffer to arrive one at a time.
    """

    def __init__(
        self,
        buffer: TextBuffer,
        *,
        tokenizer: Optional[Tokenizer] = None,
        validator: Optional[Validator] = None,
        source: Optional[SuggestionSource] = None,
        hooks: Optional[EngineHooks] = None,
        threshold: int = DEFAULT_THRESHOLD,
        validate_on_focus_loss: bool = True,
        bus: Optional[EventBus] = None,
        logger_name: str = "tokenfield.engine",
    ) -> None:
        self.buffer = buffer
        self.validator = validator
        self.source = source
        self.hooks = hooks or EngineHooks()
        self.bus = bus or EventBus()
        self.validate_on_focus_loss = validate_on_focus_loss
        self._logger_name = logger_name
        self._tokenizer = tokenizer
        self._threshold = normalize_threshold(threshold)
        self._sequencer = QuerySequencer()
        self._substitution: Optional[SubstitutionMarker] = None

    @classmethod
    def from_config(
        cls,
        buffer: TextBuffer,
        config: "EngineConfig",
        **kwargs: object,
    ) -> "AutoCompleteEngine":
        tokenizer = SingleCharTokenizer(config.separator) if config.tokenize else None
        return cls(
            buffer,
            tokenizer=tokenizer,
            threshold=config.threshold,
            validate_on_focus_loss=config.validate_on_focus_loss,
            **kwargs,  # type: ignore[arg-type]
        )

    @property
    def tokenizer(self) -> Optional[Tokenizer]:
        return self._tokenizer

    def set_tokenizer(self, tokenizer: Optional[Tokenizer]) -> None:
        self._tokenizer = tokenizer
        telemetry.record_event(
            "engine.tokenizer",
            level="debug",
            data={"tokenizer": repr(tokenizer)},
            logger_name=self._logger_name,
        )

    @property
    def threshold(self) -> int:
        return self._threshold

    @threshold.setter
    def threshold(self, value: int) -> None:
        self._threshold = normalize_threshold(value)

    @property
    def last_substitution(self) -> Optional[SubstitutionMarker]:
        return self._substitution

    def enough_to_filter(self) -> bool:
        return enough_to_filter(
            self._tokenizer,
            self.buffer.content,
            self.buffer.selection_end(),
            self._threshold,
        )

    def perform_filtering(self, key_code: int | None = None) -> FilterOutcome:
        """Submit the active token to the source, or dismiss and clear.

        Exactly one of the two branches runs per call.
        """

        with telemetry.span(
            "engine::perform_filtering",
            logger_name=self._logger_name,
            component="filtering",
            metadata={"key_code": key_code, "tokenized": self._tokenizer is not None},
        ):
            if self.enough_to_filter():
                start, end = active_token_span(
                    self._tokenizer, self.buffer.content, self.buffer.selection_end()
                )
                return self._submit(self.buffer.read(start, end), start, end)
            return self._dismiss()

    def perform_validation(self) -> Optional[ValidationReport]:
        if self.validator is None:
            return None
        if self._tokenizer is None:
            report = validate_whole_text(
                self.buffer, self.validator, logger_name=self._logger_name
            )
        else:
            report = validate_tokens(
                self.buffer, self._tokenizer, self.validator, logger_name=self._logger_name
            )
        if report.changed:
            self._substitution = None
        self.bus.emit("validation.done", report)
        return report

    def set_or_replace_text(self, suggestion: TextLike) -> Optional[SubstitutionMarker]:
        """Complete the active token with ``suggestion`` (or set the whole text)."""

        if self._tokenizer is None:
            marker = replace_whole_text(self.buffer, suggestion)
        else:
            marker = replace_active_token(
                self.buffer, self._tokenizer, suggestion, logger_name=self._logger_name
            )
        self._substitution = marker
        self._sequencer.retire()
        self.bus.emit("text.replaced", marker)
        return marker

    def handle_backspace(self) -> bool:
        """Undo the last completion if it is still the most recent edit.

        Returns False when the host should perform an ordinary deletion.
        """

        marker, self._substitution = self._substitution, None
        if marker is None:
            return False
        delta = revert_substitution(self.buffer, marker)
        if delta is None:
            return False
        self.bus.emit("text.reverted", marker)
        return True

    def on_text_changed(self, text: TextLike, cursor: int, key_code: int | None = None) -> FilterOutcome:
        """Host edit: sync the buffer when it differs, then re-run filtering."""

        if str(text) != self.buffer.text:
            self.buffer.set_text(text, cursor=cursor)
            self._substitution = None
        else:
            self.buffer.set_cursor(cursor)
        return self.perform_filtering(key_code)

    def on_selection_changed(self, cursor: int) -> FilterOutcome:
        if cursor != self.buffer.selection_end():
            self._substitution = None
        self.buffer.set_cursor(cursor)
        return self.perform_filtering()

    def on_focus_lost(self) -> Optional[ValidationReport]:
        self._dismiss()
        if not self.validate_on_focus_loss:
            return None
        return self.perform_validation()

    def on_suggestion_chosen(self, suggestion: TextLike) -> Optional[SubstitutionMarker]:
        self.hooks.dismiss_suggestions()
        return self.set_or_replace_text(suggestion)

    def _submit(self, query: str, start: int, end: int) -> FilterOutcome:
        ticket = self._sequencer.issue(query, start, end)
        self.bus.emit("filter.submit", ticket)
        if self.source is not None:
            try:
                self.source.query(
                    query, lambda results, ticket=ticket: self.deliver(ticket, results)
                )
            except Exception as exc:
                telemetry.record_event(
                    "suggestions.error",
                    level="warning",
                    data={"query": query, "error": str(exc)},
                    logger_name=self._logger_name,
                )
                if self._sequencer.is_live(ticket):
                    self.hooks.dismiss_suggestions()
        return FilterOutcome(
            action="submit", query=query, start=start, end=end, sequence=ticket.sequence
        )

    def _dismiss(self) -> FilterOutcome:
        ticket = self._sequencer.issue(None)
        self.hooks.dismiss_suggestions()
        if self.source is not None:
            self.source.clear()
        self.bus.emit("filter.dismiss", ticket)
        return FilterOutcome(action="dismiss", sequence=ticket.sequence)

    def deliver(self, ticket: QueryTicket, results: Optional[Sequence[str]]) -> bool:
        """Accept results for ``ticket``; stale tickets are dropped.

        ``None`` (a failed lookup) and an empty sequence both hide the view.
        """

        if not self._sequencer.is_live(ticket):
            telemetry.record_event(
                "suggestions.stale",
                level="debug",
                data={"sequence": ticket.sequence, "query": ticket.query},
                logger_name=self._logger_name,
            )
            self.bus.emit("suggestions.stale", ticket)
            return False
        candidates = list(results or ())
        if candidates and ticket.query is not None:
            self.hooks.show_suggestions(ticket.query, candidates)
        else:
            self.hooks.dismiss_suggestions()
        self.bus.emit("suggestions.ready", candidates)
        return True


__all__ = ["AutoCompleteEngine"]
