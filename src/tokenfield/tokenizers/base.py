"""Tokenizer capability: locating and terminating delimited tokens."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from tokenfield.buffer.spans import TextLike


@dataclass(frozen=True, slots=True)
class Segment:
    """One delimiter-separated stretch of text.

    ``[start, end)`` covers leading spaces, the token and its terminator;
    ``content_end`` is where the token stops (the terminator position, or the
    end of text for the last segment).
    """

    start: int
    content_end: int
    end: int


class Tokenizer(ABC):
    """Finds the token around a cursor and terminates replacement text.

    Implementations hold configuration only; every method must be a pure
    function of its arguments.
    """

    @abstractmethod
    def find_token_start(self, text: TextLike, cursor: int) -> int:
        """Start of the token that ends at ``cursor``; never past ``cursor``."""

    @abstractmethod
    def find_token_end(self, text: TextLike, cursor: int) -> int:
        """End (exclusive of any terminator) of the token starting at ``cursor``."""

    @abstractmethod
    def terminate_token(self, text: TextLike) -> TextLike:
        """Return ``text`` ending with a terminator, keeping its spans."""

    def segments(self, text: TextLike) -> List[Segment]:
        length = len(text)
        result: List[Segment] = []
        position = 0
        while True:
            content_end = self.find_token_end(text, position)
            if content_end >= length:
                result.append(Segment(position, length, length))
                return result
            result.append(Segment(position, content_end, content_end + 1))
            position = content_end + 1
