"""Activity-type constraints."""

from __future__ import annotations

from challenge_engine.constraints.base import ChallengeConstraint
from challenge_engine.models.challenge import ChallengeDefinition
from challenge_engine.models.workout import WorkoutFacts


class RequiredActivityConstraint(ChallengeConstraint):
    """The workout must be exactly the required activity."""

    constraint_id = "required_activity"
    field_name = "required_activity"
    order = 5

    def check(self, definition: ChallengeDefinition, facts: WorkoutFacts) -> str | None:
        required = self.threshold(definition)
        if facts.activity_type == required:
            return None
        return f"Activity must be {required.value}"


class AcceptedActivitiesConstraint(ChallengeConstraint):
    """The workout must be one of the accepted activities."""

    constraint_id = "accepted_activities"
    field_name = "accepted_activities"
    order = 6

    def check(self, definition: ChallengeDefinition, facts: WorkoutFacts) -> str | None:
        accepted = self.threshold(definition)
        if facts.activity_type in accepted:
            return None
        names = ", ".join(a.value for a in accepted)
        return f"Activity must be one of: {names}"
