"""Room state: the unit of orchestration, mutated in place by the state machine."""

from __future__ import annotations

from dataclasses import dataclass, field

from challenge_engine.models.enums import MIN_LEVEL, ParticipantState, RoomPhase


@dataclass
class ParticipantStatus:
    """A participant's standing inside one room."""

    status: ParticipantState = ParticipantState.ACTIVE
    completed_levels: list[int] = field(default_factory=list)
    last_activity_at: int | None = None  # unix seconds


@dataclass
class RoomState:
    """Mutable room snapshot owned by a single RoomStateMachine.

    Replaced wholesale when a new room forms; no history is kept.
    """

    room_id: str = ""
    participants: list[str] = field(default_factory=list)
    current_level: int = MIN_LEVEL
    phase: RoomPhase = RoomPhase.WAITING
    challenge_started_at_ms: int | None = None
    participant_status: dict[str, ParticipantStatus] = field(default_factory=dict)

    def active_participants(self) -> list[str]:
        """Participants not yet eliminated, in roster order."""
        return [
            p
            for p in self.participants
            if self.participant_status.get(p, ParticipantStatus()).status
            != ParticipantState.ELIMINATED
        ]
