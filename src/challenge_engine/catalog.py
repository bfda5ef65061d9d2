"""Challenge rule catalog — the ten levels of the Gantz ladder.

Distances are in miles (5K = 3.1 mi, 10K = 6.2 mi), durations in minutes.
"""

from __future__ import annotations

from challenge_engine.models.challenge import ChallengeDefinition
from challenge_engine.models.enums import MAX_LEVEL, MIN_LEVEL, ActivityType

_DISTANCE_ACTIVITIES = (ActivityType.WALKING, ActivityType.RUNNING, ActivityType.CYCLING)

CHALLENGE_LEVELS: dict[int, ChallengeDefinition] = {
    1: ChallengeDefinition(
        level=1,
        title="Endurance Foundation",
        description="Walk, run, or cycle 1 mile",
        difficulty="Beginner",
        requirements=(
            "Complete 1 mile distance",
            "Choose: walking, running, or cycling",
            "Any pace acceptable",
        ),
        min_distance_miles=1.0,
        accepted_activities=_DISTANCE_ACTIVITIES,
    ),
    2: ChallengeDefinition(
        level=2,
        title="Distance Builder",
        description="Walk, run, or cycle 2 miles",
        difficulty="Beginner+",
        requirements=(
            "Complete 2 miles distance",
            "Choose: walking, running, or cycling",
            "Any pace acceptable",
        ),
        min_distance_miles=2.0,
        accepted_activities=_DISTANCE_ACTIVITIES,
    ),
    3: ChallengeDefinition(
        level=3,
        title="Strength & Cardio",
        description="Walk, run, or cycle 1 mile AND do 100 pushups",
        difficulty="Intermediate",
        requirements=(
            "Complete 1 mile distance (walk/run/cycle)",
            "Complete 100 pushups",
            "Both exercises must be completed within 24 hours",
        ),
        min_distance_miles=1.0,
        min_pushups=100,
        accepted_activities=_DISTANCE_ACTIVITIES,
    ),
    4: ChallengeDefinition(
        level=4,
        title="Speed Challenge I",
        description="Run a 5K in under 40 minutes",
        difficulty="Intermediate",
        requirements=(
            "Complete 5K (3.1 miles) running distance",
            "Finish time must be under 40:00 minutes",
            "Running only - no walking/cycling",
        ),
        exact_distance_miles=3.1,
        max_duration_minutes=40,
        required_activity=ActivityType.RUNNING,
    ),
    5: ChallengeDefinition(
        level=5,
        title="Speed Challenge II",
        description="Run a 5K in under 39 minutes",
        difficulty="Intermediate+",
        requirements=(
            "Complete 5K (3.1 miles) running distance",
            "Finish time must be under 39:00 minutes",
            "Running only - no walking/cycling",
        ),
        exact_distance_miles=3.1,
        max_duration_minutes=39,
        required_activity=ActivityType.RUNNING,
    ),
    6: ChallengeDefinition(
        level=6,
        title="Upper Body Power",
        description="Do 150 pushups",
        difficulty="Advanced",
        requirements=(
            "Complete 150 pushups total",
            "Can be done in sets throughout the day",
            "All reps must be completed within 24 hours",
        ),
        min_pushups=150,
    ),
    7: ChallengeDefinition(
        level=7,
        title="Core Endurance",
        description="100 sit-ups in one hour",
        difficulty="Advanced",
        requirements=(
            "Complete 100 sit-ups",
            "Must be completed within 1 hour",
            "Can be done in sets within the hour",
        ),
        max_duration_minutes=60,
        min_situps=100,
    ),
    8: ChallengeDefinition(
        level=8,
        title="Long Distance",
        description="Run a 10K",
        difficulty="Advanced",
        requirements=(
            "Complete 10K (6.2 miles) running distance",
            "Any finishing time acceptable",
            "Running only - no walking/cycling",
        ),
        exact_distance_miles=6.2,
        required_activity=ActivityType.RUNNING,
    ),
    9: ChallengeDefinition(
        level=9,
        title="Elite Speed",
        description="1 mile in under 8 minutes",
        difficulty="Elite",
        requirements=(
            "Complete 1 mile running distance",
            "Finish time must be under 8:00 minutes",
            "Running only - elite pace required",
        ),
        exact_distance_miles=1.0,
        max_duration_minutes=8,
        required_activity=ActivityType.RUNNING,
    ),
    10: ChallengeDefinition(
        level=10,
        title="GANTZ ULTIMATE CHALLENGE",
        description="100 pushups, 100 sit-ups, and 10K run in under 80 minutes",
        difficulty="EXTREME",
        requirements=(
            "Complete 100 pushups",
            "Complete 100 sit-ups",
            "Complete 10K (6.2 miles) run",
            "All exercises must be completed within 80 minutes total",
            "Order of exercises is your choice",
        ),
        exact_distance_miles=6.2,
        max_duration_minutes=80,
        min_pushups=100,
        min_situps=100,
        required_activity=ActivityType.RUNNING,
    ),
}


def get_challenge_level(level: int) -> ChallengeDefinition | None:
    """Return the definition for *level*, or None if it does not exist."""
    return CHALLENGE_LEVELS.get(level)


def get_next_level(level: int) -> ChallengeDefinition | None:
    """Return the definition after *level*, or None past the final level."""
    return CHALLENGE_LEVELS.get(level + 1)


def all_levels() -> list[ChallengeDefinition]:
    """All definitions in ascending level order."""
    return [CHALLENGE_LEVELS[k] for k in sorted(CHALLENGE_LEVELS)]


def clamp_level(level: int) -> int:
    """Clamp *level* into the inclusive range [1, 10]."""
    return max(MIN_LEVEL, min(MAX_LEVEL, level))
