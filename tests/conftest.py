"""Shared test fixtures: workout events, parsed facts, a ready validator."""

from __future__ import annotations

import itertools
from typing import Callable

import pytest

from challenge_engine.models.enums import WORKOUT_EVENT_KIND
from challenge_engine.models.event import RawEvent
from challenge_engine.models.workout import WorkoutFacts
from challenge_engine.validator import ChallengeValidator

CHALLENGE_START_MS = 1_700_000_000_000
CHALLENGE_START_S = CHALLENGE_START_MS // 1000


@pytest.fixture
def challenge_start_ms() -> int:
    return CHALLENGE_START_MS


@pytest.fixture
def make_event() -> Callable[..., RawEvent]:
    """Factory for RawEvents; defaults to a kind-1301 record by ``alice``."""
    counter = itertools.count(1)

    def _make(
        tags=(),
        content: str = "",
        author: str = "alice",
        created_at: int = CHALLENGE_START_S + 600,
        kind: int = WORKOUT_EVENT_KIND,
        event_id: str | None = None,
    ) -> RawEvent:
        return RawEvent(
            id=event_id or f"evt-{next(counter)}",
            kind=kind,
            content=content,
            tags=tuple(tags),
            created_at=created_at,
            author=author,
        )

    return _make


@pytest.fixture
def make_facts() -> Callable[..., WorkoutFacts]:
    """Factory for WorkoutFacts with identity fields filled in."""

    def _make(**fields) -> WorkoutFacts:
        fields.setdefault("event_id", "evt")
        fields.setdefault("author", "alice")
        fields.setdefault("timestamp", CHALLENGE_START_S)
        fields.setdefault("raw_content", "")
        return WorkoutFacts(**fields)

    return _make


@pytest.fixture
def validator() -> ChallengeValidator:
    return ChallengeValidator()


@pytest.fixture
def run_5k_tags() -> tuple:
    """A level-4-qualifying 5K run: 3.1 mi in 38:30."""
    return (
        ("activity_type", "running"),
        ("distance", "3.1", "mi"),
        ("duration", "00:38:30"),
        ("t", "GantzChallenge"),
    )
