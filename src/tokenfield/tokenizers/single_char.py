"""Tokenizer for lists separated by one character (``a;b;c``)."""

from __future__ import annotations

from tokenfield.buffer.spans import SpannedText, TextLike

from .base import Tokenizer

DEFAULT_SEPARATOR = ";"


class SingleCharTokenizer(Tokenizer):
    """Items separated by a single character, optionally followed by spaces."""

    def __init__(self, separator: str = DEFAULT_SEPARATOR) -> None:
        if len(separator) != 1:
            raise ValueError(f"separator must be one character, got {separator!r}")
        self.separator = separator

    def __repr__(self) -> str:
        return f"SingleCharTokenizer(separator={self.separator!r})"

    def find_token_start(self, text: TextLike, cursor: int) -> int:
        i = cursor
        while i > 0 and text[i - 1] != self.separator:
            i -= 1
        # spaces typed after a separator are formatting, not token content
        while i < cursor and text[i] == " ":
            i += 1
        return i

    def find_token_end(self, text: TextLike, cursor: int) -> int:
        length = len(text)
        i = cursor
        while i < length:
            if text[i] == self.separator:
                return i
            i += 1
        return length

    def terminate_token(self, text: TextLike) -> TextLike:
        i = len(text)
        while i > 0 and text[i - 1] == " ":
            i -= 1
        if i > 0 and text[i - 1] == self.separator:
            return text
        if isinstance(text, SpannedText):
            terminated = SpannedText(text.text + self.separator)
            return terminated.copy_spans_from(text, 0, len(text))
        return f"{text}{self.separator}"
