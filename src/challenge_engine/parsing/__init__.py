"""Workout record parsing: tag extraction plus free-text fallback."""

from challenge_engine.parsing.tags import (
    TagValue,
    get_tag_value,
    get_tag_value_with_unit,
    get_tag_values,
    has_tag_value,
)
from challenge_engine.parsing.text_fallback import ContentFacts, parse_workout_content
from challenge_engine.parsing.workout_parser import parse_workout_event

__all__ = [
    "ContentFacts",
    "TagValue",
    "get_tag_value",
    "get_tag_value_with_unit",
    "get_tag_values",
    "has_tag_value",
    "parse_workout_content",
    "parse_workout_event",
]
