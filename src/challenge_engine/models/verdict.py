"""Verification output: what the validator says about one workout."""

from __future__ import annotations

from dataclasses import dataclass, field

from challenge_engine.models.enums import ConstraintStatus
from challenge_engine.models.workout import WorkoutFacts


@dataclass(frozen=True)
class ConstraintResult:
    """Record of a single constraint's evaluation."""

    constraint_id: str
    status: ConstraintStatus
    message: str = ""


@dataclass(frozen=True)
class VerificationVerdict:
    """Pass/fail verdict for one (level, facts) pair.

    ``errors`` lists every violated constraint in declaration order;
    ``constraint_results`` is the full audit trail, including constraints
    that passed or did not apply to the level.
    """

    is_valid: bool
    errors: tuple[str, ...]
    level: int
    constraint_results: tuple[ConstraintResult, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class EventVerification:
    """Parse + verify attempt for one raw event.

    ``success`` is False when the parser rejected the event; ``error`` then
    carries the reason and ``facts``/``verdict`` are None.
    """

    success: bool
    facts: WorkoutFacts | None = None
    verdict: VerificationVerdict | None = None
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.success and self.verdict is not None and self.verdict.is_valid

    @property
    def errors(self) -> tuple[str, ...]:
        if self.verdict is not None:
            return self.verdict.errors
        return (self.error,) if self.error else ()
