"""Text buffer abstractions, formatting spans, and substitution markers."""

from .buffer import BufferDelta, TextBuffer, Transaction
from .spans import Span, SpannedText, TextLike, plain
from .state import SelectionState
from .sync import BufferMirror, BufferValidationError
from .undo import SubstitutionMarker, revert_substitution
from .validation import clamp_cursor, ensure_range

__all__ = [
    "TextBuffer",
    "BufferDelta",
    "Transaction",
    "Span",
    "SpannedText",
    "TextLike",
    "plain",
    "SelectionState",
    "BufferMirror",
    "BufferValidationError",
    "SubstitutionMarker",
    "revert_substitution",
    "clamp_cursor",
    "ensure_range",
]
