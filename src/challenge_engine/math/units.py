"""Distance, duration and pace conversion and formatting.

All functions are pure and return None for input they cannot interpret
instead of raising.
"""

from __future__ import annotations

import math
from typing import Any

from challenge_engine.models.enums import KM_PER_MILE, METERS_PER_FOOT, METERS_PER_MILE

# Unit aliases → meters per unit
_METERS_PER_UNIT: dict[str, float] = {
    "km": 1000.0,
    "kilometer": 1000.0,
    "kilometers": 1000.0,
    "mi": METERS_PER_MILE,
    "mile": METERS_PER_MILE,
    "miles": METERS_PER_MILE,
    "m": 1.0,
    "meter": 1.0,
    "meters": 1.0,
    "ft": METERS_PER_FOOT,
    "feet": METERS_PER_FOOT,
}

# Unit aliases → minutes per unit
_MINUTES_PER_UNIT: dict[str, float] = {
    "s": 1.0 / 60.0,
    "sec": 1.0 / 60.0,
    "secs": 1.0 / 60.0,
    "second": 1.0 / 60.0,
    "seconds": 1.0 / 60.0,
    "min": 1.0,
    "mins": 1.0,
    "minute": 1.0,
    "minutes": 1.0,
    "h": 60.0,
    "hr": 60.0,
    "hrs": 60.0,
    "hour": 60.0,
    "hours": 60.0,
}


def parse_number(value: Any) -> float | None:
    """Parse *value* as a finite, non-negative float."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def parse_count(value: Any) -> int | None:
    """Parse *value* as a non-negative integer count (fractions truncated)."""
    number = parse_number(value)
    return int(number) if number is not None else None


def convert_distance(value: float, from_unit: str | None, to_unit: str | None) -> float:
    """Convert a distance between km, mi, m and ft.

    An unknown source unit returns *value* unchanged; an unknown target
    unit returns meters.
    """
    src = (from_unit or "").strip().lower()
    dst = (to_unit or "").strip().lower()
    if src == dst:
        return value
    if src not in _METERS_PER_UNIT:
        return value
    meters = value * _METERS_PER_UNIT[src]
    if dst not in _METERS_PER_UNIT:
        return meters
    return meters / _METERS_PER_UNIT[dst]


def to_miles(value: Any, unit: str | None = None) -> float | None:
    """Convert a tag distance to miles. A missing unit means miles."""
    number = parse_number(value)
    if number is None:
        return None
    if unit is None or not str(unit).strip():
        return number
    key = str(unit).strip().lower()
    if key in ("km", "kilometer", "kilometers", "k"):
        return number / KM_PER_MILE
    if key not in _METERS_PER_UNIT:
        return None
    return number * _METERS_PER_UNIT[key] / METERS_PER_MILE


def clock_to_minutes(text: str) -> float | None:
    """Convert ``MM:SS`` or ``HH:MM:SS`` to fractional minutes."""
    parts = text.strip().split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        numbers = [int(p) for p in parts]
    except ValueError:
        return None
    if any(n < 0 for n in numbers):
        return None
    if len(numbers) == 2:
        minutes, seconds = numbers
        return minutes + seconds / 60.0
    hours, minutes, seconds = numbers
    return hours * 60 + minutes + seconds / 60.0


def duration_to_minutes(value: Any, unit: str | None = None) -> float | None:
    """Convert a tag duration to minutes.

    Colon strings are clock times. Plain numbers take *unit* (seconds,
    minutes or hours); with no unit they are minutes.
    """
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if ":" in text:
        return clock_to_minutes(text)
    number = parse_number(text)
    if number is None:
        return None
    if unit is None or not str(unit).strip():
        return number
    factor = _MINUTES_PER_UNIT.get(str(unit).strip().lower())
    if factor is None:
        return None
    return number * factor


def parse_duration_to_seconds(value: Any) -> int | None:
    """Parse seconds, ``HH:MM:SS`` or ``MM:SS`` into whole seconds.

    Numbers are taken as seconds. Clock fields are range-checked
    (minutes and seconds below 60).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value < 0:
            return None
        return int(value)

    text = str(value).strip()
    if ":" in text:
        parts = text.split(":")
        try:
            numbers = [int(p) for p in parts]
        except ValueError:
            return None
        if len(numbers) == 3:
            hours, minutes, seconds = numbers
            if hours < 0 or not 0 <= minutes < 60 or not 0 <= seconds < 60:
                return None
            return hours * 3600 + minutes * 60 + seconds
        if len(numbers) == 2:
            minutes, seconds = numbers
            if minutes < 0 or not 0 <= seconds < 60:
                return None
            return minutes * 60 + seconds
        return None

    try:
        seconds = int(text)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def format_duration(value: Any) -> str | None:
    """Format a duration as ``0:SS``, ``M:SS`` or ``H:MM:SS``."""
    total = parse_duration_to_seconds(value)
    if total is None:
        return None
    if total < 60:
        return f"0:{total:02d}"
    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    if hours == 0:
        return f"{minutes}:{seconds:02d}"
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def format_minutes(minutes: float) -> str:
    """Format fractional minutes as ``M:SS``, or ``N min`` when whole."""
    whole = int(minutes)
    seconds = round((minutes - whole) * 60)
    if seconds == 60:
        whole, seconds = whole + 1, 0
    if seconds > 0:
        return f"{whole}:{seconds:02d}"
    return f"{whole} min"


def format_distance(value: Any, unit: str = "km") -> str | None:
    """Format a distance with its unit, e.g. ``5.0 km`` or ``800 m``."""
    distance = parse_number(value)
    if distance is None:
        return None
    if unit in ("m", "meters") or distance > 100:
        decimals = 0
    else:
        decimals = 1
    return f"{distance:.{decimals}f} {unit}"


def pace_minutes_per_mile(
    distance_miles: float | None, duration_minutes: float | None
) -> float | None:
    """Average pace in minutes per mile, or None without usable inputs."""
    if not distance_miles or duration_minutes is None:
        return None
    return duration_minutes / distance_miles


def format_pace(pace: Any, distance_unit: str | None = "km") -> str | None:
    """Format a pace value.

    Numeric paces are minutes per unit (``8.5`` → ``8:30 min/mi``). String
    paces that already carry a unit are returned unchanged.
    """
    if pace is None or pace == "":
        return None
    pace_unit = "min/mi" if distance_unit in ("mi", "mile", "miles") else "min/km"
    if isinstance(pace, str):
        if "/" in pace:
            return pace
        return f"{pace} {pace_unit}"
    number = parse_number(pace)
    if number is None:
        return None
    minutes = int(number)
    seconds = round((number - minutes) * 60)
    if seconds == 60:
        minutes, seconds = minutes + 1, 0
    return f"{minutes}:{seconds:02d} {pace_unit}"


def format_heart_rate(value: Any, unit: str = "bpm") -> str | None:
    """Format a heart rate, rejecting values outside 1-250 bpm."""
    hr = parse_count(value)
    if hr is None or hr <= 0 or hr > 250:
        return None
    return f"{hr} {unit}"


def format_elevation(value: Any, unit: str = "m") -> str | None:
    """Format an elevation rounded to whole units."""
    if value is None or isinstance(value, bool):
        return None
    try:
        elevation = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(elevation):
        return None
    return f"{round(elevation)} {unit}"
