"""Feed aggregator: verify a whole room's workouts and summarise who qualified."""

from __future__ import annotations

import time
from typing import Iterable, Sequence

from challenge_engine.completion import challenge_start_seconds
from challenge_engine.description import summarize_workout
from challenge_engine.models.enums import ROOM_CORRELATION_TAGS, WORKOUT_EVENT_KIND, BadgeType
from challenge_engine.models.event import RawEvent
from challenge_engine.models.feed import (
    ChallengeFeed,
    FeedEntry,
    FeedSummary,
    ParticipantFeedStatus,
    VerificationBadge,
)
from challenge_engine.models.verdict import EventVerification
from challenge_engine.parsing.tags import has_tag_value
from challenge_engine.validator import ChallengeValidator

_PRIORITY_VERIFIED = 1
_PRIORITY_OTHER = 2

_BADGE_TEXT: dict[BadgeType, str] = {
    BadgeType.VERIFIED: "Verified",
    BadgeType.UNVERIFIED: "Not Qualifying",
    BadgeType.ERROR: "Invalid Event",
}


def classify_badge(verification: EventVerification) -> VerificationBadge:
    """Three-tier badge: verified, unverified (parsed, not qualifying), error.

    A record from which no metric at all could be extracted counts as
    unparseable and gets the error badge.
    """
    if not verification.success or verification.facts is None:
        badge = BadgeType.ERROR
    elif verification.is_valid:
        badge = BadgeType.VERIFIED
    elif not verification.facts.has_any_metric:
        badge = BadgeType.ERROR
    else:
        badge = BadgeType.UNVERIFIED
    return VerificationBadge(type=badge, text=_BADGE_TEXT[badge])


def is_room_event(event: RawEvent, room_id: str) -> bool:
    """True if *event* carries a ``challenge_id`` or ``room_id`` tag for *room_id*."""
    return has_tag_value(event.tags, ROOM_CORRELATION_TAGS, room_id)


def build_challenge_feed(
    events: Iterable[RawEvent],
    participants: Sequence[str],
    level: int,
    challenge_started_at_ms: int,
    room_id: str | None = None,
    validator: ChallengeValidator | None = None,
    now_ms: int | None = None,
) -> ChallengeFeed:
    """Aggregate a room's workout events into a verified, sorted feed.

    An event survives when its author is a participant, it was created at or
    after the challenge start second, it is a workout record, and, whenever
    *room_id* is given, it is tagged for that room. Untagged events are then
    excluded so concurrent rooms sharing the network stay isolated.

    Entries are ordered verified first, then newest first. Apart from
    ``last_updated_ms`` the result depends only on the inputs.
    """
    validator = validator or ChallengeValidator()
    since = challenge_start_seconds(challenge_started_at_ms)
    roster = list(dict.fromkeys(participants))
    members = set(roster)

    surviving = [
        e
        for e in events
        if e.author in members
        and e.created_at >= since
        and e.kind == WORKOUT_EVENT_KIND
        and (room_id is None or is_room_event(e, room_id))
    ]

    entries: list[FeedEntry] = []
    for event in surviving:
        verification = validator.verify_event(level, event)
        valid = verification.is_valid
        entries.append(
            FeedEntry(
                event=event,
                verification=verification,
                is_valid=valid,
                workout_summary=summarize_workout(verification.facts),
                badge=classify_badge(verification),
                sort_priority=_PRIORITY_VERIFIED if valid else _PRIORITY_OTHER,
                time_since_challenge_s=event.created_at - since,
            )
        )

    entries.sort(key=lambda e: (e.sort_priority, -e.created_at))

    participant_status: dict[str, ParticipantFeedStatus] = {}
    for author in roster:
        own = tuple(e for e in entries if e.author == author)
        participant_status[author] = ParticipantFeedStatus(
            author=author,
            has_completed=any(e.is_valid for e in own),
            event_count=len(own),
            latest_event=own[0] if own else None,
            events=own,
        )

    summary = FeedSummary(
        total_events=len(entries),
        valid_events=sum(1 for e in entries if e.is_valid),
        completed_participants=sum(1 for s in participant_status.values() if s.has_completed),
        total_participants=len(roster),
    )

    return ChallengeFeed(
        entries=tuple(entries),
        participant_status=participant_status,
        summary=summary,
        last_updated_ms=now_ms if now_ms is not None else int(time.time() * 1000),
    )
