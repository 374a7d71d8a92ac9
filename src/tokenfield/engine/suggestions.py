"""Query sequencing so that only the newest suggestion results are shown."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class QueryTicket:
    sequence: int
    query: Optional[str]
    start: int
    end: int


class QuerySequencer:
    """Hands out increasing tickets and remembers which one is live.

    Issuing a ticket (including the empty one used when dismissing) supersedes
    every earlier ticket.
    """

    def __init__(self) -> None:
        self._counter = 0
        self._live: Optional[QueryTicket] = None

    def issue(self, query: Optional[str], start: int = 0, end: int = 0) -> QueryTicket:
        self._counter += 1
        self._live = QueryTicket(self._counter, query, start, end)
        return self._live

    def is_live(self, ticket: QueryTicket) -> bool:
        return self._live is not None and ticket.sequence == self._live.sequence

    def retire(self) -> None:
        self._live = None


__all__ = ["QueryTicket", "QuerySequencer"]
