"""Textual host wiring for the autocomplete engine."""

from .controller import TextualAutoCompleteAdapter, TextualUIHooks

__all__ = ["TextualAutoCompleteAdapter", "TextualUIHooks"]
