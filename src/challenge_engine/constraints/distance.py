"""Distance constraints: minimum distance and approximate exact distance."""

from __future__ import annotations

from challenge_engine.constraints.base import ChallengeConstraint, fmt
from challenge_engine.models.challenge import ChallengeDefinition
from challenge_engine.models.enums import EXACT_DISTANCE_TOLERANCE_MILES, TOLERANCE_EPSILON
from challenge_engine.models.workout import WorkoutFacts


class MinDistanceConstraint(ChallengeConstraint):
    """Distance must reach the level's minimum."""

    constraint_id = "min_distance"
    field_name = "min_distance_miles"
    order = 0

    def check(self, definition: ChallengeDefinition, facts: WorkoutFacts) -> str | None:
        minimum = self.threshold(definition)
        if facts.distance_miles is not None and facts.distance_miles >= minimum:
            return None
        return f"Distance must be at least {fmt(minimum)} miles"


class ExactDistanceConstraint(ChallengeConstraint):
    """Distance must be within ±0.1 mi of the target (race distances)."""

    constraint_id = "exact_distance"
    field_name = "exact_distance_miles"
    order = 1

    def check(self, definition: ChallengeDefinition, facts: WorkoutFacts) -> str | None:
        target = self.threshold(definition)
        if facts.distance_miles is not None and abs(
            facts.distance_miles - target
        ) <= EXACT_DISTANCE_TOLERANCE_MILES + TOLERANCE_EPSILON:
            return None
        return f"Distance must be approximately {fmt(target)} miles"
