"""Challenge level definition."""

from __future__ import annotations

from dataclasses import dataclass, field

from challenge_engine.models.enums import CHALLENGE_WINDOW_HOURS, ActivityType


@dataclass(frozen=True)
class ChallengeDefinition:
    """One level of the challenge ladder.

    Constraint fields are declared in the order their errors are reported.
    A field left at None does not apply to the level.
    """

    level: int
    title: str
    description: str
    difficulty: str
    requirements: tuple[str, ...] = field(default_factory=tuple)
    time_limit_hours: int = CHALLENGE_WINDOW_HOURS

    # Constraints
    min_distance_miles: float | None = None
    exact_distance_miles: float | None = None
    max_duration_minutes: float | None = None
    min_pushups: int | None = None
    min_situps: int | None = None
    required_activity: ActivityType | None = None
    accepted_activities: tuple[ActivityType, ...] | None = None
