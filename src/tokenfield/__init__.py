"""Delimited multi-token autocomplete editing engine."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "engine",
    "runtime",
    "tokenizers",
]

__version__ = "0.1.0"
