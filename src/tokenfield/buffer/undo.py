"""Auto-inserted substitution markers and the undo-on-backspace policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .buffer import BufferDelta, TextBuffer


@dataclass(frozen=True, slots=True)
class SubstitutionMarker:
    """Range ``[start, end)`` that a completion wrote over ``original``.

    ``version`` is the buffer version right after the substitution; once the
    buffer moves past it the marker no longer describes the live text.
    """

    start: int
    end: int
    original: str
    replacement: str
    version: int

    def is_current(self, buffer: "TextBuffer") -> bool:
        return (
            buffer.version == self.version
            and buffer.selection_end() == self.end
            and buffer.read(self.start, self.end) == self.replacement
        )


def revert_substitution(
    buffer: "TextBuffer", marker: SubstitutionMarker
) -> Optional["BufferDelta"]:
    """Put ``marker.original`` back if the substitution is still the last edit."""

    if not marker.is_current(buffer):
        return None
    return buffer.replace(
        marker.start, marker.end, marker.original, label="revert_substitution"
    )


__all__ = ["SubstitutionMarker", "revert_substitution"]
