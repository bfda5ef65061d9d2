"""Network event shapes consumed and produced by the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawEvent:
    """A signed event as received from the network, already normalised.

    ``author`` is always a plain public-key string. ``tags`` keeps whatever
    entries the publishing client sent, malformed ones included; readers in
    ``challenge_engine.parsing.tags`` skip entries they cannot use.
    """

    id: str
    kind: int
    content: str
    tags: tuple[Any, ...]
    created_at: int  # unix seconds
    author: str


@dataclass(frozen=True)
class EventFilter:
    """Relay query: which kinds/authors, from when, how many."""

    kinds: frozenset[int]
    authors: frozenset[str] | None = None
    since: int | None = None  # unix seconds
    limit: int | None = None

    def cache_key(self) -> str:
        """Stable string key for caching the result of this query."""
        kinds = ",".join(str(k) for k in sorted(self.kinds))
        authors = ",".join(sorted(self.authors)) if self.authors else "*"
        return f"events:{kinds}:{authors}:{self.since}:{self.limit}"


@dataclass(frozen=True)
class EventDraft:
    """Unsigned event handed to the publisher."""

    kind: int
    content: str
    tags: tuple[tuple[str, ...], ...] = field(default_factory=tuple)
    created_at: int | None = None


@dataclass(frozen=True)
class PublishResult:
    """Outcome of an attempt to publish an EventDraft."""

    success: bool
    event_id: str | None = None
    error: str | None = None
