"""WorkoutFacts: normalised facts extracted from one workout record."""

from __future__ import annotations

from dataclasses import dataclass

from challenge_engine.models.enums import ActivityType


@dataclass(frozen=True)
class WorkoutFacts:
    """Structured view of a kind-1301 event.

    Recomputed per event and never persisted. Every numeric field is None
    or a finite non-negative number; distance is in miles and duration in
    minutes regardless of how the record expressed them.
    """

    event_id: str
    author: str
    timestamp: int
    raw_content: str

    activity_type: ActivityType | None = None
    distance_miles: float | None = None
    duration_minutes: float | None = None
    pushups: int | None = None
    situps: int | None = None
    calories_kcal: int | None = None
    heart_rate_bpm: int | None = None

    @property
    def has_any_metric(self) -> bool:
        """True if at least one field beyond identity could be extracted."""
        return any(
            value is not None
            for value in (
                self.activity_type,
                self.distance_miles,
                self.duration_minutes,
                self.pushups,
                self.situps,
                self.calories_kcal,
                self.heart_rate_bpm,
            )
        )
