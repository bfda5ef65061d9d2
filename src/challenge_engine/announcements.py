"""Draft builders for the notes a room publishes about itself.

These drafts are optimistic announcements only; room progression never
reads them back as evidence.
"""

from __future__ import annotations

import json
import time

import numpy as np

from challenge_engine.description import summarize_workout
from challenge_engine.models.enums import NOTE_EVENT_KIND
from challenge_engine.models.event import EventDraft
from challenge_engine.models.workout import WorkoutFacts

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _now_seconds(now: float | None) -> float:
    return time.time() if now is None else now


def generate_room_id(now_ms: int | None = None, rng: np.random.Generator | None = None) -> str:
    """Unique room identifier: ``gantz-<unix ms>-<9 random base36 chars>``."""
    rng = rng or np.random.default_rng()
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(_BASE36[i] for i in rng.integers(0, len(_BASE36), size=9))
    return f"gantz-{now_ms}-{suffix}"


def _workout_details(facts: WorkoutFacts) -> str:
    lines: list[str] = []
    if facts.activity_type is not None:
        lines.append(f"Activity: {facts.activity_type.value}")
    if facts.distance_miles:
        lines.append(f"Distance: {facts.distance_miles:g} miles")
    if facts.duration_minutes:
        hours = int(facts.duration_minutes // 60)
        minutes = int(facts.duration_minutes % 60)
        seconds = int(round((facts.duration_minutes % 1) * 60)) % 60
        pieces = []
        if hours:
            pieces.append(f"{hours}h")
        if minutes:
            pieces.append(f"{minutes}m")
        if seconds:
            pieces.append(f"{seconds}s")
        lines.append(f"Duration: {' '.join(pieces)}")
    if facts.pushups:
        lines.append(f"Push-ups: {facts.pushups}")
    if facts.situps:
        lines.append(f"Sit-ups: {facts.situps}")
    return "\n".join(lines)


def challenge_result_draft(
    level: int,
    completed: bool,
    room_id: str | None = None,
    facts: WorkoutFacts | None = None,
    now: float | None = None,
) -> EventDraft:
    """Note announcing that a participant cleared (or failed) a level."""
    now_s = _now_seconds(now)
    if completed:
        content = (
            f"GANTZ CHALLENGE LEVEL {level} COMPLETED!\n\n"
            "Just crushed another level in the Gantz fitness challenge!"
        )
        if facts is not None:
            content += f"\n\nWorkout details:\n{_workout_details(facts)}"
        content += f"\n\n#GantzChallenge #Fitness #Level{level} #NostrFitness"
    else:
        content = (
            f"Gantz Challenge Level {level} - Eliminated\n\n"
            "Could not complete the challenge in time. I'll train harder and return stronger!"
            f"\n\n#GantzChallenge #Level{level} #Training #NeverGiveUp"
        )

    tags: list[tuple[str, ...]] = [
        ("t", "GantzChallenge"),
        ("t", "Fitness"),
        ("t", "NostrFitness"),
        ("t", f"Level{level}"),
        ("challenge_level", str(level)),
        ("challenge_result", "completed" if completed else "eliminated"),
        ("challenge_timestamp", str(int(now_s * 1000))),
    ]
    if room_id:
        tags.append(("room_id", room_id))
    if completed and facts is not None:
        if facts.activity_type is not None:
            tags.append(("activity_type", facts.activity_type.value))
        if facts.distance_miles:
            tags.append(("distance", f"{facts.distance_miles:g}", "mi"))
        if facts.duration_minutes:
            tags.append(("duration", f"{facts.duration_minutes:g}", "minutes"))

    return EventDraft(
        kind=NOTE_EVENT_KIND,
        content=content,
        tags=tuple(tags),
        created_at=int(now_s),
    )


def room_formation_draft(
    participants: list[str],
    level: int,
    room_id: str,
    now: float | None = None,
) -> EventDraft:
    """Note announcing a newly formed room and its roster."""
    now_s = _now_seconds(now)
    roster = "\n".join(f"{i}. {p[:16]}..." for i, p in enumerate(participants, start=1))
    content = (
        f"GANTZ ROOM FORMED - LEVEL {level}\n\n"
        f"A new Gantz challenge room has been formed! "
        f"{len(participants)} participants selected:\n\n{roster}\n\n"
        f"Participants have 24 hours to complete Level {level}. "
        "Only the strongest will advance.\n\n"
        f"#GantzChallenge #RoomFormation #Level{level}"
    )
    tags: list[tuple[str, ...]] = [
        ("t", "GantzChallenge"),
        ("t", "RoomFormation"),
        ("t", f"Level{level}"),
        ("room_id", room_id),
        ("challenge_level", str(level)),
        ("participant_count", str(len(participants))),
        ("formation_timestamp", str(int(now_s * 1000))),
    ]
    tags.extend(("p", p) for p in participants)
    return EventDraft(kind=NOTE_EVENT_KIND, content=content, tags=tuple(tags), created_at=int(now_s))


def verification_draft(
    participant: str,
    level: int,
    verified: bool,
    errors: tuple[str, ...] = (),
    facts: WorkoutFacts | None = None,
    now: float | None = None,
) -> EventDraft:
    """Organizer note recording the sweep's verdict for one participant."""
    now_s = _now_seconds(now)
    header = f"CHALLENGE VERIFICATION - Level {level}\n\nParticipant: {participant[:16]}...\n"
    if verified:
        details = json.dumps({"summary": summarize_workout(facts)}, indent=2)
        content = f"{header}Status: VERIFIED\nVerification details: {details}"
    else:
        reason = ", ".join(errors) or "Requirements not met"
        content = f"{header}Status: FAILED VERIFICATION\nReason: {reason}"
    content += f"\n\n#GantzVerification #Level{level}"

    tags = (
        ("t", "GantzVerification"),
        ("t", f"Level{level}"),
        ("p", participant),
        ("challenge_level", str(level)),
        ("verification_result", "verified" if verified else "failed"),
        ("verification_timestamp", str(int(now_s * 1000))),
    )
    return EventDraft(kind=NOTE_EVENT_KIND, content=content, tags=tags, created_at=int(now_s))
