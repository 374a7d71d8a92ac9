"""Cursor tracking for a single-line text field."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SelectionState:
    """Cursor offset into the buffer; the selection end always equals it."""

    cursor: int = 0

    @property
    def selection_end(self) -> int:
        return self.cursor

    def set_cursor(self, offset: int) -> None:
        self.cursor = offset
