"""Duration constraint: finish within the level's time cap."""

from __future__ import annotations

from challenge_engine.constraints.base import ChallengeConstraint, fmt
from challenge_engine.models.challenge import ChallengeDefinition
from challenge_engine.models.workout import WorkoutFacts


class MaxDurationConstraint(ChallengeConstraint):
    """Duration must not exceed the cap (the cap itself passes)."""

    constraint_id = "max_duration"
    field_name = "max_duration_minutes"
    order = 2

    def check(self, definition: ChallengeDefinition, facts: WorkoutFacts) -> str | None:
        cap = self.threshold(definition)
        if facts.duration_minutes is not None and facts.duration_minutes <= cap:
            return None
        return f"Must be completed in under {fmt(cap)} minutes"
