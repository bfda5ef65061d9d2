"""Workout parser: RawEvent (kind 1301) → WorkoutFacts.

Two stages per field: structured tags first, then the free-text fallback
in ``text_fallback`` for whatever the tags left empty. Apart from the
wrong-kind check, malformed input degrades to None and never raises.
"""

from __future__ import annotations

from typing import Any

from challenge_engine.exceptions import InvalidEventKind
from challenge_engine.math.units import duration_to_minutes, parse_count, to_miles
from challenge_engine.models.enums import (
    TAG_ACTIVITY_TYPE,
    TAG_CALORIES,
    TAG_DISTANCE,
    TAG_DURATION,
    TAG_EXERCISE,
    TAG_HASHTAG,
    TAG_HEART_RATE,
    TAG_PUSHUPS,
    TAG_REPS,
    TAG_SITUPS,
    WORKOUT_EVENT_KIND,
    ActivityType,
)
from challenge_engine.models.event import RawEvent
from challenge_engine.models.workout import WorkoutFacts
from challenge_engine.parsing.tags import (
    get_tag_value,
    get_tag_value_with_unit,
    get_tag_values,
)
from challenge_engine.parsing.text_fallback import (
    ContentFacts,
    match_activity_keyword,
    mentions_pushups,
    mentions_situps,
    parse_workout_content,
)

_ACTIVITY_VALUES = {a.value: a for a in ActivityType}


def parse_workout_event(event: RawEvent) -> WorkoutFacts:
    """Parse one workout record into WorkoutFacts.

    Raises:
        InvalidEventKind: if ``event.kind`` is not 1301.
    """
    if event.kind != WORKOUT_EVENT_KIND:
        raise InvalidEventKind(event.kind)

    tags = event.tags
    content = event.content if isinstance(event.content, str) else ""
    text = parse_workout_content(content)

    activity = _extract_activity(tags)
    if activity is None:
        activity = text.activity_type
    if activity is None and _has_activity_tag(tags):
        activity = ActivityType.UNKNOWN

    distance = _extract_distance(tags)
    if distance is None:
        distance = text.distance_miles

    duration = _extract_duration(tags)
    if duration is None:
        duration = text.duration_minutes

    pushups, situps = _extract_reps(tags, content, text)

    return WorkoutFacts(
        event_id=event.id,
        author=event.author,
        timestamp=event.created_at,
        raw_content=content,
        activity_type=activity,
        distance_miles=distance,
        duration_minutes=duration,
        pushups=pushups,
        situps=situps,
        calories_kcal=parse_count(get_tag_value(tags, TAG_CALORIES)),
        heart_rate_bpm=parse_count(get_tag_value(tags, TAG_HEART_RATE)),
    )


# ---------------------------------------------------------------------------
# Structured-tag extractors
# ---------------------------------------------------------------------------


def normalize_activity(value: Any) -> ActivityType | None:
    """Map a tag value to the activity vocabulary, or None if unrecognised."""
    if not isinstance(value, str) or not value.strip():
        return None
    exact = _ACTIVITY_VALUES.get(value.strip().lower())
    if exact is not None and exact is not ActivityType.UNKNOWN:
        return exact
    return match_activity_keyword(value)


def activity_from_exercise_id(exercise: Any) -> ActivityType | None:
    """Derive an activity from an ``kind:pubkey:identifier`` exercise reference.

    Only the third segment is inspected, e.g. ``33401:<pubkey>:uuid-running``.
    """
    if not isinstance(exercise, str):
        return None
    parts = exercise.split(":")
    if len(parts) < 3:
        return None
    return match_activity_keyword(parts[2])


def _has_activity_tag(tags: Any) -> bool:
    return get_tag_value(tags, TAG_ACTIVITY_TYPE) is not None


def _extract_activity(tags: Any) -> ActivityType | None:
    activity = normalize_activity(get_tag_value(tags, TAG_ACTIVITY_TYPE))
    if activity is not None:
        return activity

    # Hashtags also carry challenge labels (GantzChallenge, Level3, ...)
    for value in get_tag_values(tags, TAG_HASHTAG):
        activity = normalize_activity(value)
        if activity is not None:
            return activity

    return activity_from_exercise_id(get_tag_value(tags, TAG_EXERCISE))


def _extract_distance(tags: Any) -> float | None:
    tag = get_tag_value_with_unit(tags, TAG_DISTANCE)
    if tag is None:
        return None
    return to_miles(tag.value, tag.unit)


def _extract_duration(tags: Any) -> float | None:
    tag = get_tag_value_with_unit(tags, TAG_DURATION)
    if tag is None:
        return None
    return duration_to_minutes(tag.value, tag.unit)


def _extract_reps(tags: Any, content: str, text: ContentFacts) -> tuple[int | None, int | None]:
    """Resolve pushup and situp counts from dedicated tags, then ``reps``, then text."""
    pushups = parse_count(get_tag_value(tags, TAG_PUSHUPS))
    situps = parse_count(get_tag_value(tags, TAG_SITUPS))

    reps = parse_count(get_tag_value(tags, TAG_REPS))
    if reps is not None:
        exercise = get_tag_value(tags, TAG_EXERCISE)
        exercise_name = exercise if isinstance(exercise, str) else ""
        if pushups is None and (mentions_pushups(content) or mentions_pushups(exercise_name)):
            pushups = reps
        elif situps is None and (mentions_situps(content) or mentions_situps(exercise_name)):
            situps = reps

    if pushups is None:
        pushups = text.pushups
    if situps is None:
        situps = text.situps
    return pushups, situps
