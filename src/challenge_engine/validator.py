"""ChallengeValidator — evaluates workouts against challenge levels."""

from __future__ import annotations

import logging

from challenge_engine.catalog import get_challenge_level
from challenge_engine.exceptions import InvalidEventKind
from challenge_engine.models.enums import ConstraintStatus
from challenge_engine.models.event import RawEvent
from challenge_engine.models.verdict import (
    ConstraintResult,
    EventVerification,
    VerificationVerdict,
)
from challenge_engine.models.workout import WorkoutFacts
from challenge_engine.parsing.workout_parser import parse_workout_event
from challenge_engine.registry import ConstraintRegistry

logger = logging.getLogger(__name__)


class ChallengeValidator:
    """Checks WorkoutFacts against a level's constraints.

    Every applicable constraint is evaluated and every failure is reported,
    so callers get the full list of deficiencies rather than the first one.

    Usage:
        validator = ChallengeValidator()
        verdict = validator.validate(4, facts)
        verification = validator.verify_event(4, raw_event)
    """

    def __init__(self, registry: ConstraintRegistry | None = None) -> None:
        self.registry = registry or ConstraintRegistry()

        # Auto-discover constraints if using default registry
        if registry is None:
            self.registry.discover_constraints()

    def validate(self, level: int, facts: WorkoutFacts) -> VerificationVerdict:
        """Evaluate *facts* against *level*.

        An unknown level yields an invalid verdict with a single error
        rather than an exception, so batch verification never aborts.
        """
        definition = get_challenge_level(level)
        if definition is None:
            return VerificationVerdict(
                is_valid=False,
                errors=(f"Unknown challenge level: {level}",),
                level=level,
            )

        errors: list[str] = []
        results: list[ConstraintResult] = []
        for constraint in self.registry.get_all_constraints():
            if not constraint.applies_to(definition):
                results.append(
                    ConstraintResult(
                        constraint_id=constraint.constraint_id,
                        status=ConstraintStatus.NOT_APPLICABLE,
                    )
                )
                continue

            error = constraint.check(definition, facts)
            if error is None:
                results.append(
                    ConstraintResult(
                        constraint_id=constraint.constraint_id,
                        status=ConstraintStatus.PASSED,
                    )
                )
            else:
                errors.append(error)
                results.append(
                    ConstraintResult(
                        constraint_id=constraint.constraint_id,
                        status=ConstraintStatus.FAILED,
                        message=error,
                    )
                )

        return VerificationVerdict(
            is_valid=not errors,
            errors=tuple(errors),
            level=level,
            constraint_results=tuple(results),
        )

    def verify_event(self, level: int, event: RawEvent) -> EventVerification:
        """Parse *event* and validate it, capturing parser rejection as a failed result."""
        try:
            facts = parse_workout_event(event)
        except InvalidEventKind as exc:
            logger.debug("Skipping event %s: %s", event.id, exc)
            return EventVerification(success=False, error=str(exc))

        return EventVerification(
            success=True,
            facts=facts,
            verdict=self.validate(level, facts),
        )
