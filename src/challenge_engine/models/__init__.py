"""Data models for the challenge engine."""

from challenge_engine.models.challenge import ChallengeDefinition
from challenge_engine.models.enums import (
    ActivityType,
    BadgeType,
    ConstraintStatus,
    ParticipantState,
    RoomPhase,
)
from challenge_engine.models.event import EventDraft, EventFilter, PublishResult, RawEvent
from challenge_engine.models.feed import (
    ChallengeFeed,
    CompletionReport,
    FeedEntry,
    FeedSummary,
    ParticipantFeedStatus,
    VerificationBadge,
)
from challenge_engine.models.room import ParticipantStatus, RoomState
from challenge_engine.models.verdict import (
    ConstraintResult,
    EventVerification,
    VerificationVerdict,
)
from challenge_engine.models.workout import WorkoutFacts

__all__ = [
    "ActivityType",
    "BadgeType",
    "ChallengeDefinition",
    "ChallengeFeed",
    "CompletionReport",
    "ConstraintResult",
    "ConstraintStatus",
    "EventDraft",
    "EventFilter",
    "EventVerification",
    "FeedEntry",
    "FeedSummary",
    "ParticipantFeedStatus",
    "ParticipantState",
    "ParticipantStatus",
    "PublishResult",
    "RawEvent",
    "RoomPhase",
    "RoomState",
    "VerificationBadge",
    "VerificationVerdict",
    "WorkoutFacts",
]
