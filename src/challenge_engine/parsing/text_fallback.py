"""Free-text fallback: scan a workout's content string for facts.

Used only for fields the structured tag stage could not fill. Pure and
independent of tags so it can be exercised on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from challenge_engine.math.units import clock_to_minutes, parse_count, parse_number, to_miles
from challenge_engine.models.enums import ActivityType

# Keyword table, checked in order; each keyword must start a word.
_ACTIVITY_KEYWORDS: tuple[tuple[ActivityType, re.Pattern[str]], ...] = (
    (ActivityType.RUNNING, re.compile(r"\b(?:run|jog)", re.IGNORECASE)),
    (ActivityType.CYCLING, re.compile(r"\b(?:cycl|bik|bicycl)", re.IGNORECASE)),
    (ActivityType.WALKING, re.compile(r"\bwalk", re.IGNORECASE)),
    (ActivityType.SWIMMING, re.compile(r"\bswim", re.IGNORECASE)),
    (ActivityType.HIKING, re.compile(r"\bhik", re.IGNORECASE)),
    (
        ActivityType.STRENGTH,
        re.compile(r"\b(?:strength|lift|weight|push-?ups?|sit-?ups?|crunch)", re.IGNORECASE),
    ),
)

_NUMBER = r"(\d+(?:\.\d+)?)"

# Distance patterns in priority order: miles, kilometers, meters
_DISTANCE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(_NUMBER + r"\s*(?:miles?|mi)\b", re.IGNORECASE), "mi"),
    (re.compile(_NUMBER + r"\s*(?:kilomet(?:er|re)s?|km|k)\b", re.IGNORECASE), "km"),
    (re.compile(_NUMBER + r"\s*(?:met(?:er|re)s?|m)\b", re.IGNORECASE), "m"),
)

# A bare "m" right after an hours token is minutes, as in "1h 30m"
_HOURS_TOKEN_BEFORE = re.compile(r"\d\s*(?:hours?|hrs?|h)\s*$", re.IGNORECASE)

_CLOCK_PATTERN = re.compile(r"\b(\d{1,2}:\d{2}(?::\d{2})?)\b")
_MINUTES_PATTERN = re.compile(_NUMBER + r"\s*(?:minutes?|mins?)\b", re.IGNORECASE)
_HOURS_PATTERN = re.compile(_NUMBER + r"\s*(?:hours?|hrs?|h)\b", re.IGNORECASE)

_PUSHUP_PATTERNS = (
    re.compile(r"(\d+)\s*push-?ups?", re.IGNORECASE),
    re.compile(r"push-?ups?:?\s*(\d+)", re.IGNORECASE),
)
_SITUP_PATTERNS = (
    re.compile(r"(\d+)\s*(?:sit-?ups?|crunch(?:es)?)", re.IGNORECASE),
    re.compile(r"(?:sit-?ups?|crunch(?:es)?):?\s*(\d+)", re.IGNORECASE),
)

_PUSHUP_MENTION = re.compile(r"push-?ups?", re.IGNORECASE)
_SITUP_MENTION = re.compile(r"sit-?ups?|crunch", re.IGNORECASE)


@dataclass(frozen=True)
class ContentFacts:
    """Facts recovered from free text. Any field may be None."""

    activity_type: ActivityType | None = None
    distance_miles: float | None = None
    duration_minutes: float | None = None
    pushups: int | None = None
    situps: int | None = None


def match_activity_keyword(text: str | None) -> ActivityType | None:
    """Return the first activity whose keyword starts a word in *text*."""
    if not text:
        return None
    for activity, pattern in _ACTIVITY_KEYWORDS:
        if pattern.search(text):
            return activity
    return None


def mentions_pushups(text: str | None) -> bool:
    return bool(text) and bool(_PUSHUP_MENTION.search(text))


def mentions_situps(text: str | None) -> bool:
    return bool(text) and bool(_SITUP_MENTION.search(text))


def extract_distance_miles(text: str) -> float | None:
    """First distance in miles, trying miles, then km, then meters."""
    for pattern, unit in _DISTANCE_PATTERNS:
        for match in pattern.finditer(text):
            if unit == "m" and _is_minutes_suffix(text, match):
                continue
            return to_miles(match.group(1), unit)
    return None


def _is_minutes_suffix(text: str, match: re.Match[str]) -> bool:
    if not match.group(0).lower().endswith("m"):
        return False
    return bool(_HOURS_TOKEN_BEFORE.search(text[: match.start()]))


def extract_duration_minutes(text: str) -> float | None:
    """First duration in minutes: clock time, then minutes, then hours."""
    match = _CLOCK_PATTERN.search(text)
    if match:
        minutes = clock_to_minutes(match.group(1))
        if minutes is not None:
            return minutes
    match = _MINUTES_PATTERN.search(text)
    if match:
        return parse_number(match.group(1))
    match = _HOURS_PATTERN.search(text)
    if match:
        hours = parse_number(match.group(1))
        return hours * 60 if hours is not None else None
    return None


def _first_count(text: str, patterns: tuple[re.Pattern[str], ...]) -> int | None:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return parse_count(match.group(1))
    return None


def parse_workout_content(content: str | None) -> ContentFacts:
    """Extract whatever workout facts the free-text *content* states."""
    if not content or not isinstance(content, str):
        return ContentFacts()
    return ContentFacts(
        activity_type=match_activity_keyword(content),
        distance_miles=extract_distance_miles(content),
        duration_minutes=extract_duration_minutes(content),
        pushups=_first_count(content, _PUSHUP_PATTERNS),
        situps=_first_count(content, _SITUP_PATTERNS),
    )
