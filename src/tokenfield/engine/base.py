"""Shared result types, hooks and the event bus used by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class EngineHooks:
    """Callbacks the host supplies to render or hide the suggestion view."""

    show_suggestions: Callable[[str, Sequence[str]], None] = _noop
    dismiss_suggestions: Callable[[], None] = _noop


@dataclass(slots=True)
class FilterOutcome:
    """Which branch one filtering pass took.

    ``action`` is ``"submit"`` (``query`` went to the source) or ``"dismiss"``
    (view hidden, source cleared).
    """

    action: str
    query: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None
    sequence: Optional[int] = None

    @property
    def submitted(self) -> bool:
        return self.action == "submit"


@dataclass(slots=True)
class ValidationReport:
    """Edits made by one validation pass, in the order they were applied."""

    deleted: int = 0
    fixed: int = 0
    normalized: int = 0
    text: str = ""

    @property
    def changed(self) -> bool:
        return bool(self.deleted or self.fixed or self.normalized)


class EventBus:
    """Minimal event bus so hosts can observe engine activity."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = ["EngineHooks", "FilterOutcome", "ValidationReport", "EventBus"]
