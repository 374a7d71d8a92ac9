"""Immutable text with attached formatting spans."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple, Union


@dataclass(frozen=True, slots=True)
class Span:
    """Formatting attributes attached to ``[start, end)`` of a text."""

    start: int
    end: int
    attributes: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span range [{self.start}, {self.end})")
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def shifted(self, delta: int) -> "Span":
        return Span(self.start + delta, self.end + delta, self.attributes)

    def clipped(self, start: int, end: int) -> "Span":
        return Span(start, end, self.attributes)

    def __hash__(self) -> int:
        return hash((self.start, self.end, tuple(sorted(self.attributes.items()))))


@dataclass(frozen=True, slots=True)
class SpannedText:
    """Text plus formatting spans; every edit returns a new instance.

    Slicing with an integer yields a plain character, slicing with a slice
    yields a ``SpannedText`` whose spans are clipped to the slice.
    """

    text: str = ""
    spans: Tuple[Span, ...] = ()

    def __post_init__(self) -> None:
        spans = tuple(self.spans)
        for item in spans:
            if item.end > len(self.text):
                raise ValueError(
                    f"Span [{item.start}, {item.end}) exceeds text length {len(self.text)}"
                )
        object.__setattr__(self, "spans", spans)

    @classmethod
    def coerce(cls, value: "TextLike") -> "SpannedText":
        if isinstance(value, SpannedText):
            return value
        return cls(str(value))

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self.text))
            if step != 1:
                raise ValueError("SpannedText slices must be contiguous")
            return self.subsequence(start, max(start, stop))
        return self.text[index]

    def subsequence(self, start: int, end: int) -> "SpannedText":
        spans = []
        for item in self.spans:
            lo, hi = max(item.start, start), min(item.end, end)
            if lo < hi or (item.start == item.end and start <= item.start <= end):
                spans.append(Span(lo - start, hi - start, item.attributes))
        return SpannedText(self.text[start:end], tuple(spans))

    def with_span(self, start: int, end: int, **attributes: object) -> "SpannedText":
        return SpannedText(self.text, self.spans + (Span(start, end, attributes),))

    def copy_spans_from(
        self,
        source: "SpannedText",
        src_start: int,
        src_end: int,
        dest_offset: int = 0,
    ) -> "SpannedText":
        """Copy spans of ``source[src_start:src_end]`` onto this text at ``dest_offset``."""

        copied = source.subsequence(src_start, src_end).spans
        limit = len(self.text)
        rebased = tuple(
            Span(min(s.start + dest_offset, limit), min(s.end + dest_offset, limit), s.attributes)
            for s in copied
        )
        return SpannedText(self.text, self.spans + rebased)

    def replace(self, start: int, end: int, replacement: "TextLike") -> "SpannedText":
        """Return the text with ``[start, end)`` replaced by ``replacement``.

        Spans wholly outside the range survive (those after it shift by the
        length delta), spans inside are dropped, spans straddling an edge keep
        only their outside parts. Spans carried by ``replacement`` are rebased
        onto the inserted range.
        """

        incoming = SpannedText.coerce(replacement)
        delta = len(incoming) - (end - start)
        spans = []
        for item in self.spans:
            if item.end <= start:
                spans.append(item)
            elif item.start >= end:
                spans.append(item.shifted(delta))
            else:
                if item.start < start:
                    spans.append(item.clipped(item.start, start))
                if item.end > end:
                    spans.append(item.clipped(end + delta, item.end + delta))
        spans.extend(item.shifted(start) for item in incoming.spans)
        text = self.text[:start] + incoming.text + self.text[end:]
        return SpannedText(text, tuple(spans))


TextLike = Union[str, SpannedText]


def plain(value: TextLike) -> str:
    return value.text if isinstance(value, SpannedText) else str(value)


__all__ = ["Span", "SpannedText", "TextLike", "plain"]
