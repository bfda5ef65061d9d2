"""Exception hierarchy for the challenge engine."""

from __future__ import annotations


class ChallengeEngineError(Exception):
    """Base exception for all challenge_engine errors."""


class InvalidEventKind(ChallengeEngineError):
    """The parser was handed an event that is not a workout record."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Invalid workout event - must be Kind 1301 (got {kind!r})")
        self.kind = kind


class RoomStateError(ChallengeEngineError):
    """A room operation was requested in a phase or for a participant that does not allow it."""
