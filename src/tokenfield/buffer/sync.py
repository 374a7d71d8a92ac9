"""Adapter boundary types for exchanging text with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .spans import Span


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: int
    version: int
    spans: Tuple[Span, ...] = ()
    attributes: dict[str, str] = field(default_factory=dict)


class BufferValidationError(RuntimeError):
    """Raised when callers hand the buffer an out-of-bounds offset or range."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
