"""Abstract base class for all challenge constraints."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from challenge_engine.models.challenge import ChallengeDefinition
from challenge_engine.models.workout import WorkoutFacts


def fmt(value: Any) -> str:
    """Render a threshold without trailing zeros (1.0 → 1, 3.1 → 3.1)."""
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class ChallengeConstraint(ABC):
    """One independent requirement a level may impose on a workout.

    Constraints are discovered automatically by the ConstraintRegistry and
    evaluated by the ChallengeValidator.

    Subclasses must define:
        constraint_id: unique identifier (e.g. "min_distance")
        field_name: the ChallengeDefinition field holding the threshold
        order: position of that field in ChallengeDefinition; errors are
               reported in this order
        check(): returns an error message, or None when satisfied
    """

    constraint_id: str
    field_name: str
    order: int

    def threshold(self, definition: ChallengeDefinition) -> Any:
        return getattr(definition, self.field_name, None)

    def applies_to(self, definition: ChallengeDefinition) -> bool:
        """A constraint applies when the level sets its field."""
        return self.threshold(definition) is not None

    @abstractmethod
    def check(self, definition: ChallengeDefinition, facts: WorkoutFacts) -> str | None:
        """Evaluate the constraint.

        Returns None if *facts* satisfy it, otherwise the error message.
        Only called when ``applies_to(definition)`` is True.
        """
        ...
