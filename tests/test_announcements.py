"""Tests for room id generation and announcement drafts."""

import re

import numpy as np

from challenge_engine.announcements import (
    challenge_result_draft,
    generate_room_id,
    room_formation_draft,
    verification_draft,
)
from challenge_engine.models.enums import NOTE_EVENT_KIND, ActivityType

NOW = 1_700_000_000.0


class TestGenerateRoomId:
    def test_format(self):
        room_id = generate_room_id(1_700_000_000_000, np.random.default_rng(1))
        assert re.fullmatch(r"gantz-1700000000000-[0-9a-z]{9}", room_id)

    def test_seeded_generator_is_reproducible(self):
        a = generate_room_id(1, np.random.default_rng(7))
        b = generate_room_id(1, np.random.default_rng(7))
        assert a == b

    def test_distinct_ids(self):
        rng = np.random.default_rng(3)
        assert generate_room_id(1, rng) != generate_room_id(1, rng)


class TestChallengeResultDraft:
    def test_completed_with_facts(self, make_facts):
        facts = make_facts(activity_type=ActivityType.RUNNING, distance_miles=3.1, duration_minutes=38.5)
        draft = challenge_result_draft(4, True, room_id="room-1", facts=facts, now=NOW)
        assert draft.kind == NOTE_EVENT_KIND
        assert draft.created_at == int(NOW)
        assert ("challenge_result", "completed") in draft.tags
        assert ("room_id", "room-1") in draft.tags
        assert ("distance", "3.1", "mi") in draft.tags
        assert ("challenge_timestamp", "1700000000000") in draft.tags
        assert "LEVEL 4 COMPLETED" in draft.content
        assert "Duration: 38m 30s" in draft.content

    def test_eliminated(self):
        draft = challenge_result_draft(2, False, now=NOW)
        assert ("challenge_result", "eliminated") in draft.tags
        assert "Eliminated" in draft.content
        assert not any(t[0] == "room_id" for t in draft.tags)


class TestRoomFormationDraft:
    def test_tags_every_participant(self):
        draft = room_formation_draft(["a" * 64, "b" * 64], 3, "room-9", now=NOW)
        assert ("p", "a" * 64) in draft.tags
        assert ("p", "b" * 64) in draft.tags
        assert ("participant_count", "2") in draft.tags
        assert ("room_id", "room-9") in draft.tags
        assert "LEVEL 3" in draft.content


class TestVerificationDraft:
    def test_failed_lists_reasons(self):
        draft = verification_draft("c" * 64, 4, False, errors=("too slow", "too short"), now=NOW)
        assert "Reason: too slow, too short" in draft.content
        assert ("verification_result", "failed") in draft.tags

    def test_verified_includes_summary(self, make_facts):
        facts = make_facts(activity_type=ActivityType.RUNNING, distance_miles=1.0)
        draft = verification_draft("c" * 64, 1, True, facts=facts, now=NOW)
        assert "Status: VERIFIED" in draft.content
        assert "running, 1.0 miles" in draft.content
