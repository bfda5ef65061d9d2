"""Tests for the JSON-file relay and its use through NostrClient."""

import json

import pytest

from challenge_engine.models.event import EventFilter
from nostr_client import JsonFileRelay, NostrClient


@pytest.fixture
def events_file(tmp_path, relay_events):
    path = tmp_path / "events.json"
    note = {"id": "note", "pubkey": "a" * 64, "kind": 1, "created_at": 1_700_000_950, "content": "gm", "tags": []}
    path.write_text(json.dumps(relay_events + [note]))
    return path


class TestJsonFileRelay:
    def test_filters_kind_author_since(self, events_file):
        relay = JsonFileRelay(events_file)
        result = relay.fetch({"kinds": [1301], "authors": ["a" * 64], "since": 1_700_000_500})
        assert [e["id"] for e in result] == ["late", "mid"]

    def test_newest_first_with_limit(self, events_file):
        result = JsonFileRelay(events_file).fetch({"kinds": [1301, 1], "limit": 2})
        assert [e["id"] for e in result] == ["note", "late"]

    def test_missing_file(self, tmp_path):
        assert JsonFileRelay(tmp_path / "nope.json").fetch({"kinds": [1301]}) == []

    def test_non_array_file(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text('{"id": "x"}')
        assert JsonFileRelay(path).fetch({"kinds": [1301]}) == []

    def test_publish_keeps_notes_in_memory(self, events_file):
        relay = JsonFileRelay(events_file)
        assert relay.publish({"kind": 1, "content": "hi"}) == "local-1"
        assert relay.published[0]["id"] == "local-1"
        assert len(relay.fetch({"kinds": [1]})) == 1

    def test_through_client(self, events_file):
        relay = JsonFileRelay(events_file)
        client = NostrClient(relay.fetch, relay.publish)
        events = client.fetch_events(EventFilter(kinds=frozenset({1301})))
        assert [e.id for e in events] == ["early", "mid", "late"]
