"""Tests for the room feed aggregator."""

from challenge_engine.feed import build_challenge_feed, classify_badge, is_room_event
from challenge_engine.models.enums import BadgeType
from challenge_engine.models.verdict import EventVerification

CHALLENGE_START_MS = 1_700_000_000_000
CHALLENGE_START_S = CHALLENGE_START_MS // 1000
ROOM = "gantz-1700000000000-abcdefghi"
PARTICIPANTS = ["alice", "bob", "carol", "dave"]

QUALIFYING = (("activity_type", "running"), ("distance", "1.2", "mi"), ("room_id", ROOM))
TOO_SHORT = (("activity_type", "running"), ("distance", "0.4", "mi"), ("room_id", ROOM))


class TestRoomFilter:
    def test_untagged_participant_events_are_excluded(self, make_event):
        events = [
            make_event(tags=QUALIFYING, author="alice"),
            # In-window and by a participant, but not tagged for this room
            make_event(tags=QUALIFYING[:2], author="bob"),
            make_event(tags=QUALIFYING[:2] + (("room_id", "other-room"),), author="carol"),
        ]
        feed = build_challenge_feed(events, PARTICIPANTS, 1, CHALLENGE_START_MS, room_id=ROOM)
        assert [e.author for e in feed.entries] == ["alice"]
        assert not feed.participant_status["bob"].has_completed

    def test_challenge_id_tag_also_correlates(self, make_event):
        event = make_event(tags=QUALIFYING[:2] + (("challenge_id", ROOM),))
        assert is_room_event(event, ROOM)
        feed = build_challenge_feed([event], PARTICIPANTS, 1, CHALLENGE_START_MS, room_id=ROOM)
        assert feed.summary.total_events == 1

    def test_without_room_id_untagged_events_count(self, make_event):
        feed = build_challenge_feed(
            [make_event(tags=QUALIFYING[:2], author="bob")], PARTICIPANTS, 1, CHALLENGE_START_MS
        )
        assert feed.participant_status["bob"].has_completed


class TestFiltering:
    def test_non_participants_early_events_and_notes_are_dropped(self, make_event):
        events = [
            make_event(tags=QUALIFYING, author="mallory"),
            make_event(tags=QUALIFYING, author="alice", created_at=CHALLENGE_START_S - 5),
            make_event(tags=QUALIFYING, author="alice", kind=1),
        ]
        feed = build_challenge_feed(events, PARTICIPANTS, 1, CHALLENGE_START_MS, room_id=ROOM)
        assert feed.entries == ()
        assert feed.summary.total_events == 0


class TestOrderingAndStatus:
    def test_verified_first_then_newest(self, make_event):
        events = [
            make_event(tags=TOO_SHORT, author="alice", created_at=CHALLENGE_START_S + 300, event_id="a-old"),
            make_event(tags=QUALIFYING, author="bob", created_at=CHALLENGE_START_S + 100, event_id="b-ok"),
            make_event(tags=TOO_SHORT, author="carol", created_at=CHALLENGE_START_S + 900, event_id="c-new"),
            make_event(tags=QUALIFYING, author="dave", created_at=CHALLENGE_START_S + 200, event_id="d-ok"),
        ]
        feed = build_challenge_feed(events, PARTICIPANTS, 1, CHALLENGE_START_MS, room_id=ROOM)
        assert [e.event.id for e in feed.entries] == ["d-ok", "b-ok", "c-new", "a-old"]
        assert [e.sort_priority for e in feed.entries] == [1, 1, 2, 2]
        assert feed.entries[0].time_since_challenge_s == 200

    def test_participant_status_and_summary(self, make_event):
        events = [
            make_event(tags=QUALIFYING, author="alice"),
            make_event(tags=TOO_SHORT, author="alice"),
            make_event(tags=TOO_SHORT, author="bob"),
        ]
        feed = build_challenge_feed(events, PARTICIPANTS, 1, CHALLENGE_START_MS, room_id=ROOM, now_ms=42)
        assert list(feed.participant_status) == PARTICIPANTS
        alice = feed.participant_status["alice"]
        assert alice.has_completed and alice.event_count == 2
        assert alice.latest_event.is_valid
        assert feed.participant_status["dave"].latest_event is None
        assert feed.verified_participants == ["alice"]
        assert (
            feed.summary.total_events,
            feed.summary.valid_events,
            feed.summary.completed_participants,
            feed.summary.total_participants,
        ) == (3, 1, 1, 4)
        assert feed.last_updated_ms == 42

    def test_entry_summary_text(self, make_event):
        feed = build_challenge_feed([make_event(tags=QUALIFYING)], PARTICIPANTS, 1, CHALLENGE_START_MS, room_id=ROOM)
        assert feed.entries[0].workout_summary == "running, 1.2 miles"


class TestBadges:
    def test_verified(self, make_event):
        feed = build_challenge_feed([make_event(tags=QUALIFYING)], PARTICIPANTS, 1, CHALLENGE_START_MS, room_id=ROOM)
        assert feed.entries[0].badge.type == BadgeType.VERIFIED

    def test_parsed_but_not_qualifying(self, make_event):
        feed = build_challenge_feed([make_event(tags=TOO_SHORT)], PARTICIPANTS, 1, CHALLENGE_START_MS, room_id=ROOM)
        assert feed.entries[0].badge.type == BadgeType.UNVERIFIED

    def test_no_metrics_is_error(self, make_event):
        event = make_event(tags=(("room_id", ROOM),), content="gm")
        feed = build_challenge_feed([event], PARTICIPANTS, 1, CHALLENGE_START_MS, room_id=ROOM)
        assert feed.entries[0].badge.type == BadgeType.ERROR
        assert feed.entries[0].workout_summary == "Workout completed"

    def test_parser_rejection_is_error(self):
        badge = classify_badge(EventVerification(success=False, error="bad kind"))
        assert badge.type == BadgeType.ERROR
        assert badge.text == "Invalid Event"
