"""Host-owned text buffer: spanned content, cursor, and range replacement."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional, Tuple

from tokenfield.runtime import telemetry

from .spans import Span, SpannedText, TextLike
from .state import SelectionState
from .sync import BufferMirror
from .validation import clamp_cursor, ensure_range


@dataclass(slots=True)
class BufferDelta:
    """Outcome of one replacement: the new state plus the touched range."""

    version: int
    text: str
    cursor: int
    start: int
    end: int
    removed: str
    inserted: str
    label: str

    @property
    def length_delta(self) -> int:
        return len(self.inserted) - len(self.removed)


class TextBuffer:
    """Mutable single-line buffer as a host text field would own it.

    Content is held as an immutable :class:`SpannedText`; every edit swaps in
    a new value and bumps ``version``.
    """

    def __init__(
        self,
        text: TextLike = "",
        *,
        cursor: Optional[int] = None,
        name: str = "default",
        state: Optional[SelectionState] = None,
    ) -> None:
        self.name = name
        self._content = SpannedText.coerce(text)
        self.state = state or SelectionState()
        self.version = 0
        if cursor is None:
            cursor = len(self._content)
        self.state.set_cursor(clamp_cursor(cursor, len(self._content)))

    @property
    def text(self) -> str:
        return self._content.text

    @property
    def content(self) -> SpannedText:
        return self._content

    @property
    def spans(self) -> Tuple[Span, ...]:
        return self._content.spans

    def length(self) -> int:
        return len(self._content)

    def selection_end(self) -> int:
        return self.state.selection_end

    def set_cursor(self, offset: int) -> int:
        self.state.set_cursor(clamp_cursor(offset, len(self._content)))
        return self.state.cursor

    def read(self, start: int, end: int) -> str:
        start, end = ensure_range(start, end, len(self._content))
        return self._content.text[start:end]

    def read_spanned(self, start: int, end: int) -> SpannedText:
        start, end = ensure_range(start, end, len(self._content))
        return self._content.subsequence(start, end)

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self._content.text,
            cursor=self.state.cursor,
            version=self.version,
            spans=self._content.spans,
            attributes=dict(attributes or {}),
        )

    def replace(
        self, start: int, end: int, text: TextLike, *, label: str = "replace"
    ) -> BufferDelta:
        start, end = ensure_range(start, end, len(self._content))
        incoming = SpannedText.coerce(text)
        with Transaction(self, label) as tx:
            removed = self._content.text[start:end]
            self._content = self._content.replace(start, end, incoming)
            self.state.set_cursor(_moved_cursor(self.state.cursor, start, end, len(incoming)))
            self.version += 1
            tx.annotate(start=start, end=end, inserted=len(incoming))

        return BufferDelta(
            version=self.version,
            text=self._content.text,
            cursor=self.state.cursor,
            start=start,
            end=start + len(incoming),
            removed=removed,
            inserted=incoming.text,
            label=label,
        )

    def set_text(self, text: TextLike, *, cursor: Optional[int] = None) -> BufferDelta:
        """Swap the whole content; the cursor lands at the end unless given."""

        delta = self.replace(0, len(self._content), text, label="set_text")
        target = len(self._content) if cursor is None else cursor
        delta.cursor = self.set_cursor(target)
        return delta

    def insert_text(self, text: TextLike, *, offset: Optional[int] = None) -> BufferDelta:
        position = self.state.cursor if offset is None else offset
        return self.replace(position, position, text, label="insert_text")

    def delete_range(self, start: int, end: int) -> BufferDelta:
        return self.replace(start, end, "", label="delete_range")


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name, "version": self.buffer.version},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def annotate(self, **fields: object) -> None:
        if self._handle is not None:
            for key, value in fields.items():
                self._handle.add_metadata(key, value)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _moved_cursor(cursor: int, start: int, end: int, inserted: int) -> int:
    if cursor >= end:
        return cursor + inserted - (end - start)
    if cursor > start:
        return start + inserted
    return cursor
