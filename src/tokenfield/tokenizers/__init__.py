"""Tokenizer capability and the delimiter-based implementation."""

from .base import Segment, Tokenizer
from .single_char import DEFAULT_SEPARATOR, SingleCharTokenizer

__all__ = ["Tokenizer", "Segment", "SingleCharTokenizer", "DEFAULT_SEPARATOR"]
