"""Tests for the tolerant tag readers."""

from challenge_engine.models.enums import ROOM_CORRELATION_TAGS, TAG_PUSHUPS
from challenge_engine.parsing.tags import (
    TagValue,
    get_tag_value,
    get_tag_value_with_unit,
    get_tag_values,
    has_tag_value,
)


class TestGetTagValue:
    def test_first_matching_tag_wins(self):
        tags = (("distance", "5", "km"), ("distance", "9", "km"))
        assert get_tag_value(tags, "distance") == "5"

    def test_missing_returns_default(self):
        assert get_tag_value((("t", "run"),), "distance") is None
        assert get_tag_value((), "distance", default="n/a") == "n/a"

    def test_synonyms_resolve_in_tag_order(self):
        tags = (("push-ups", "5"), ("pushups", "10"))
        assert get_tag_value(tags, TAG_PUSHUPS) == "5"

    def test_malformed_entries_are_skipped(self):
        tags = ("distance", ["distance"], None, 42, [1, "x"], {"a": 1}, ["distance", "7"])
        assert get_tag_value(tags, "distance") == "7"

    def test_non_sequence_tags(self):
        assert get_tag_value(None, "distance") is None
        assert get_tag_value("distance", "distance") is None


class TestGetTagValueWithUnit:
    def test_three_element_tag(self):
        assert get_tag_value_with_unit((("distance", "5", "km"),), "distance") == TagValue("5", "km")

    def test_two_element_tag_has_no_unit(self):
        assert get_tag_value_with_unit((("distance", "3.1"),), "distance") == TagValue("3.1", None)

    def test_blank_or_non_string_unit_is_ignored(self):
        assert get_tag_value_with_unit((("duration", "40", ""),), "duration").unit is None
        assert get_tag_value_with_unit((("duration", "40", 5),), "duration").unit is None

    def test_absent(self):
        assert get_tag_value_with_unit((), "distance") is None


class TestMultiValue:
    def test_all_hashtags_in_order(self):
        tags = (("t", "GantzChallenge"), ("distance", "1"), ("t", "running"))
        assert get_tag_values(tags, "t") == ["GantzChallenge", "running"]

    def test_room_correlation_tags(self):
        assert has_tag_value((("challenge_id", "room-1"),), ROOM_CORRELATION_TAGS, "room-1")
        assert has_tag_value((("room_id", "room-1"),), ROOM_CORRELATION_TAGS, "room-1")
        assert not has_tag_value((("room_id", "room-2"),), ROOM_CORRELATION_TAGS, "room-1")
        assert not has_tag_value((("t", "room-1"),), ROOM_CORRELATION_TAGS, "room-1")
