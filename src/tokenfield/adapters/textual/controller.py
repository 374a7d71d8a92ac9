"""Textual-facing adapter that turns widget events into engine calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from tokenfield.buffer import BufferMirror, SubstitutionMarker
from tokenfield.engine import AutoCompleteEngine, FilterOutcome, ValidationReport


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_field: Callable[[BufferMirror], None]
    show_suggestions: Callable[[Sequence[str]], None] = _noop
    hide_suggestions: Callable[[], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualAutoCompleteAdapter:
    """Bridges an input widget and a suggestion list to one engine."""

    def __init__(self, engine: AutoCompleteEngine, hooks: TextualUIHooks) -> None:
        self.engine = engine
        self.hooks = hooks
        self.engine.hooks.show_suggestions = self._show
        self.engine.hooks.dismiss_suggestions = self._hide
        self._subscribe_events()
        self._refresh_field()

    def handle_input_changed(self, value: str, cursor: int) -> FilterOutcome:
        self._log_state("changed ->", value=value, cursor=cursor)
        if value == self.engine.buffer.text and cursor == self.engine.buffer.selection_end():
            return self.engine.perform_filtering()
        return self.engine.on_text_changed(value, cursor)

    def handle_cursor_moved(self, cursor: int) -> Optional[FilterOutcome]:
        if cursor == self.engine.buffer.selection_end():
            return None
        return self.engine.on_selection_changed(cursor)

    def handle_option_selected(self, suggestion: str) -> Optional[SubstitutionMarker]:
        self._log_state("selected ->", suggestion=suggestion)
        marker = self.engine.on_suggestion_chosen(suggestion)
        self._refresh_field()
        return marker

    def handle_backspace(self) -> bool:
        return self.engine.handle_backspace()

    def handle_blur(self, *, to_suggestions: bool = False) -> Optional[ValidationReport]:
        """Focus left the input; moving into the suggestion list keeps it open."""

        if to_suggestions:
            return None
        report = self.engine.on_focus_lost()
        self._refresh_field()
        return report

    def _show(self, query: str, candidates: Sequence[str]) -> None:
        self._log_state("suggest <-", query=query, count=len(candidates))
        self.hooks.show_suggestions(candidates)

    def _hide(self) -> None:
        self.hooks.hide_suggestions()

    def _subscribe_events(self) -> None:
        bus = self.engine.bus
        for event in (
            "filter.submit",
            "filter.dismiss",
            "suggestions.stale",
            "text.replaced",
            "text.reverted",
            "validation.done",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        if name == "validation.done" and isinstance(payload, ValidationReport):
            if payload.changed:
                self.hooks.update_status(
                    f"validated: {payload.fixed} fixed, {payload.deleted} removed"
                )
        elif name == "text.reverted":
            self.hooks.update_status("completion undone")
            self._refresh_field()
        elif name == "suggestions.stale":
            self.hooks.update_status("stale suggestions dropped")

    def _refresh_field(self) -> None:
        self.hooks.update_field(self.engine.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.engine.buffer
        return {
            "cursor": buffer.selection_end(),
            "buffer": buffer.name,
            "buffer_version": buffer.version,
            "tokenized": self.engine.tokenizer is not None,
        }


__all__ = ["TextualAutoCompleteAdapter", "TextualUIHooks"]
