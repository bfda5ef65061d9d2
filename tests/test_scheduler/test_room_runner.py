"""Tests for the room runner CLI helpers."""

import json
from unittest.mock import patch

import pytest

from challenge_engine.models.enums import ParticipantState, RoomPhase
from nostr_client import JsonFileRelay
from scheduler import room_runner

START_MS = 1_700_000_000_000
ROOM = "gantz-1700000000000-abcdefghi"


def _workout(event_id, pubkey, distance, room=ROOM):
    return {
        "id": event_id,
        "pubkey": pubkey,
        "kind": 1301,
        "created_at": START_MS // 1000 + 900,
        "content": "",
        "tags": [["activity_type", "running"], ["distance", distance, "mi"], ["room_id", room]],
    }


@pytest.fixture
def relay(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(
        json.dumps(
            [
                _workout("1", "alice", "1.4"),
                _workout("2", "bob", "0.5"),
                _workout("3", "carol", "3.0", room="another-room"),
            ]
        )
    )
    return JsonFileRelay(path)


class TestSweepOnce:
    def test_verified_participant_advances(self, relay):
        state = room_runner.sweep_once(1, START_MS, ["alice", "bob", "carol"], ROOM, relay=relay)
        assert state.phase == RoomPhase.FORMED
        assert state.current_level == 2
        assert state.participants == ["alice"]
        assert state.participant_status["bob"].status == ParticipantState.ELIMINATED
        assert state.participant_status["carol"].status == ParticipantState.ELIMINATED

    def test_nobody_qualifies(self, relay):
        state = room_runner.sweep_once(4, START_MS, ["alice", "bob"], ROOM, relay=relay)
        assert state.phase == RoomPhase.WAITING
        assert state.current_level == 4

    def test_without_room_id_untagged_rooms_count(self, relay):
        state = room_runner.sweep_once(2, START_MS, ["carol"], relay=relay)
        assert state.participants == ["carol"]


class TestBuildConfig:
    def test_reform_toggle(self):
        assert room_runner.build_config(reform=False).reform_delay_s is None
        assert room_runner.build_config().reform_delay_s == room_runner.REFORM_DELAY_S
        assert room_runner.build_config().room_size == room_runner.ROOM_SIZE_TARGET


class TestMain:
    @patch.object(room_runner, "sweep_once")
    def test_once(self, mock_sweep):
        argv = ["room_runner", "--once", "--level", "3", "--start-ms", str(START_MS), "--participants", "a", "b"]
        with patch("sys.argv", argv):
            room_runner.main()
        mock_sweep.assert_called_once_with(3, START_MS, ["a", "b"], "")

    def test_once_requires_roster(self):
        with patch("sys.argv", ["room_runner", "--once", "--level", "3"]):
            with pytest.raises(SystemExit):
                room_runner.main()
