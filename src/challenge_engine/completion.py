"""Completion finder: did one participant satisfy a level inside the window?"""

from __future__ import annotations

from typing import Iterable

from challenge_engine.models.enums import WORKOUT_EVENT_KIND
from challenge_engine.models.event import RawEvent
from challenge_engine.models.feed import CompletionReport
from challenge_engine.validator import ChallengeValidator


def challenge_start_seconds(challenge_started_at_ms: int) -> int:
    """Second-granularity lower bound of the challenge window."""
    return challenge_started_at_ms // 1000


def find_completion_events(
    events: Iterable[RawEvent],
    author: str,
    level: int,
    challenge_started_at_ms: int,
    validator: ChallengeValidator | None = None,
) -> CompletionReport:
    """Verify every workout *author* published since the challenge started.

    The window's lower bound is inclusive. ``latest_completion`` is the last
    valid verification in input order, so callers should pass events in the
    chronological order they were fetched.
    """
    validator = validator or ChallengeValidator()
    since = challenge_start_seconds(challenge_started_at_ms)

    candidates = tuple(
        e
        for e in events
        if e.author == author and e.kind == WORKOUT_EVENT_KIND and e.created_at >= since
    )
    results = tuple(validator.verify_event(level, e) for e in candidates)
    valid = [r for r in results if r.is_valid]

    return CompletionReport(
        total_events=len(candidates),
        valid_completions=len(valid),
        has_completed=bool(valid),
        latest_completion=valid[-1] if valid else None,
        results=results,
        events=candidates,
    )
