"""Repetition constraints for strength levels."""

from __future__ import annotations

from challenge_engine.constraints.base import ChallengeConstraint
from challenge_engine.models.challenge import ChallengeDefinition
from challenge_engine.models.workout import WorkoutFacts


class MinPushupsConstraint(ChallengeConstraint):
    constraint_id = "min_pushups"
    field_name = "min_pushups"
    order = 3

    def check(self, definition: ChallengeDefinition, facts: WorkoutFacts) -> str | None:
        minimum = self.threshold(definition)
        if facts.pushups is not None and facts.pushups >= minimum:
            return None
        return f"Must complete at least {minimum} pushups"


class MinSitupsConstraint(ChallengeConstraint):
    constraint_id = "min_situps"
    field_name = "min_situps"
    order = 4

    def check(self, definition: ChallengeDefinition, facts: WorkoutFacts) -> str | None:
        minimum = self.threshold(definition)
        if facts.situps is not None and facts.situps >= minimum:
            return None
        return f"Must complete at least {minimum} sit-ups"
