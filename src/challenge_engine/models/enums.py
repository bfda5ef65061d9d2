"""Enumerations and fixed constants for the challenge engine.

Event kinds and tag names are part of the social-event schema and must not
change; unit constants are exact by definition.
"""

from enum import Enum, IntEnum, auto


class ActivityType(str, Enum):
    """Known workout activity vocabulary."""

    RUNNING = "running"
    WALKING = "walking"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    HIKING = "hiking"
    STRENGTH = "strength"
    UNKNOWN = "unknown"


class RoomPhase(IntEnum):
    """Room lifecycle phases."""

    WAITING = auto()
    FORMED = auto()
    CHALLENGE = auto()


class ParticipantState(str, Enum):
    """Per-room participant lifecycle marker."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ELIMINATED = "eliminated"


class BadgeType(str, Enum):
    """Verification badge tiers shown next to feed entries."""

    VERIFIED = "verified"
    UNVERIFIED = "unverified"
    ERROR = "error"


class ConstraintStatus(IntEnum):
    """Outcome of a single constraint check."""

    PASSED = auto()
    FAILED = auto()
    NOT_APPLICABLE = auto()


# ---------------------------------------------------------------------------
# Event schema
# ---------------------------------------------------------------------------

PROFILE_EVENT_KIND = 0
NOTE_EVENT_KIND = 1
WORKOUT_EVENT_KIND = 1301

# Tag names read from workout records
TAG_ACTIVITY_TYPE = "activity_type"
TAG_HASHTAG = "t"
TAG_EXERCISE = "exercise"
TAG_DISTANCE = "distance"
TAG_DURATION = "duration"
TAG_PUSHUPS = ("pushups", "push-ups")
TAG_SITUPS = ("situps", "sit-ups", "crunches")
TAG_REPS = "reps"
TAG_CALORIES = "calories"
TAG_HEART_RATE = ("heart_rate", "heartrate", "heart_rate_avg")
ROOM_CORRELATION_TAGS = ("challenge_id", "room_id")

# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

KM_PER_MILE = 1.609344
METERS_PER_MILE = 1609.344
METERS_PER_FOOT = 0.3048

# ---------------------------------------------------------------------------
# Challenge rules
# ---------------------------------------------------------------------------

MIN_LEVEL = 1
MAX_LEVEL = 10
EXACT_DISTANCE_TOLERANCE_MILES = 0.1
# Absorbs binary float error so a deviation of exactly the tolerance passes
TOLERANCE_EPSILON = 1e-9
CHALLENGE_WINDOW_HOURS = 24

# ---------------------------------------------------------------------------
# Room orchestration defaults
# ---------------------------------------------------------------------------

ROOM_SIZE = 4
MIN_ROOM_SIZE = 2
PREP_COUNTDOWN_S = 120
FEED_POLL_INTERVAL_S = 30
POOL_FETCH_LIMIT = 100
SWEEP_FETCH_LIMIT = 50
