"""Completion and feed aggregation results."""

from __future__ import annotations

from dataclasses import dataclass, field

from challenge_engine.models.enums import BadgeType
from challenge_engine.models.event import RawEvent
from challenge_engine.models.verdict import EventVerification


@dataclass(frozen=True)
class CompletionReport:
    """Outcome of scanning one author's events for a level."""

    total_events: int
    valid_completions: int
    has_completed: bool
    latest_completion: EventVerification | None
    results: tuple[EventVerification, ...] = field(default_factory=tuple)
    events: tuple[RawEvent, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class VerificationBadge:
    """Badge classification attached to a feed entry."""

    type: BadgeType
    text: str


@dataclass(frozen=True)
class FeedEntry:
    """One surviving room event with its verification metadata."""

    event: RawEvent
    verification: EventVerification
    is_valid: bool
    workout_summary: str
    badge: VerificationBadge
    sort_priority: int  # 1 = verified, 2 = everything else
    time_since_challenge_s: int

    @property
    def author(self) -> str:
        return self.event.author

    @property
    def created_at(self) -> int:
        return self.event.created_at


@dataclass(frozen=True)
class ParticipantFeedStatus:
    """Per-participant view of the room feed."""

    author: str
    has_completed: bool
    event_count: int
    latest_event: FeedEntry | None
    events: tuple[FeedEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FeedSummary:
    """Room-wide counters."""

    total_events: int
    valid_events: int
    completed_participants: int
    total_participants: int


@dataclass(frozen=True)
class ChallengeFeed:
    """Full aggregation output for a room."""

    entries: tuple[FeedEntry, ...]
    participant_status: dict[str, ParticipantFeedStatus]
    summary: FeedSummary
    last_updated_ms: int

    @property
    def verified_participants(self) -> list[str]:
        """Participants with at least one verified event, in roster order."""
        return [a for a, s in self.participant_status.items() if s.has_completed]
