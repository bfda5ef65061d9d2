"""Human-readable one-line summaries of workouts for feeds and posts."""

from __future__ import annotations

from typing import Any

from challenge_engine.math.units import (
    format_distance,
    format_duration,
    format_elevation,
    format_heart_rate,
    format_minutes,
    format_pace,
)
from challenge_engine.models.workout import WorkoutFacts
from challenge_engine.parsing.tags import get_tag_value, get_tag_value_with_unit

_EMPTY_SUMMARY = "Workout completed"


def summarize_workout(facts: WorkoutFacts | None) -> str:
    """Comma-joined activity, distance, duration and rep counts.

    Absent fields are omitted, e.g. ``running, 3.1 miles, 38:30``.
    """
    if facts is None:
        return _EMPTY_SUMMARY

    parts: list[str] = []
    if facts.activity_type is not None:
        parts.append(facts.activity_type.value)
    if facts.distance_miles:
        parts.append(f"{facts.distance_miles:.1f} miles")
    if facts.duration_minutes:
        parts.append(format_minutes(facts.duration_minutes))
    if facts.pushups:
        parts.append(f"{facts.pushups} pushups")
    if facts.situps:
        parts.append(f"{facts.situps} situps")

    return ", ".join(parts) if parts else _EMPTY_SUMMARY


def build_metrics_text(tags: Any) -> str:
    """Render the metric tags of a workout record as one display line.

    Distance keeps the unit the record used (km when none is given).
    """
    metrics: list[str] = []

    distance = get_tag_value_with_unit(tags, "distance")
    if distance is not None and distance.value:
        formatted = format_distance(distance.value, distance.unit or "km")
        if formatted:
            metrics.append(f"Distance: {formatted}")

    duration = get_tag_value(tags, "duration")
    if duration:
        formatted = format_duration(duration)
        if formatted:
            metrics.append(f"Duration: {formatted}")

    pace = get_tag_value(tags, "pace")
    if pace:
        formatted = format_pace(pace, distance.unit if distance is not None else None)
        if formatted:
            metrics.append(f"Pace: {formatted}")

    heart_rate = get_tag_value_with_unit(tags, ("heart_rate_avg", "heart_rate"))
    if heart_rate is not None and heart_rate.value:
        formatted = format_heart_rate(heart_rate.value, heart_rate.unit or "bpm")
        if formatted:
            metrics.append(f"Heart Rate: {formatted}")

    elevation = get_tag_value_with_unit(tags, ("elevation_gain", "elevation"))
    if elevation is not None and elevation.value:
        formatted = format_elevation(elevation.value, elevation.unit or "m")
        if formatted:
            metrics.append(f"Elevation: {formatted}")

    calories = get_tag_value(tags, "calories")
    if calories:
        try:
            kcal = int(str(calories).strip())
        except ValueError:
            kcal = 0
        if kcal > 0:
            metrics.append(f"Calories: {kcal}")

    return " • ".join(metrics)
