"""External capabilities the engine consumes: validators and suggestion sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

ResultCallback = Callable[[Optional[Sequence[str]]], None]


@runtime_checkable
class Validator(Protocol):
    """Tests one token and proposes a corrected replacement."""

    def is_valid(self, token: str) -> bool:
        ...

    def fix_text(self, token: str) -> str:
        ...


@runtime_checkable
class SuggestionSource(Protocol):
    """Produces candidates for a query, possibly later.

    ``query`` hands results to ``deliver`` whenever they are ready; ``None``
    signals a failed lookup. ``clear`` drops any cached results.
    """

    def query(self, text: str, deliver: ResultCallback) -> None:
        ...

    def clear(self) -> None:
        ...


@dataclass(frozen=True, slots=True)
class CallableValidator:
    """Validator assembled from two plain functions."""

    check: Callable[[str], bool]
    fix: Callable[[str], str] = str.strip

    def is_valid(self, token: str) -> bool:
        return bool(self.check(token))

    def fix_text(self, token: str) -> str:
        return self.fix(token)


class StaticSuggestionSource:
    """Synchronous source over a fixed vocabulary, case-insensitive prefix match."""

    def __init__(self, candidates: Sequence[str], *, limit: int = 20) -> None:
        self._candidates = tuple(candidates)
        self._limit = limit

    def query(self, text: str, deliver: ResultCallback) -> None:
        needle = text.casefold()
        matches = [c for c in self._candidates if c.casefold().startswith(needle)]
        deliver(matches[: self._limit])

    def clear(self) -> None:
        return None


__all__ = [
    "Validator",
    "SuggestionSource",
    "ResultCallback",
    "CallableValidator",
    "StaticSuggestionSource",
]
