"""Fixtures with realistic relay event dicts for testing."""

from __future__ import annotations

import pytest


@pytest.fixture
def relay_workout() -> dict:
    """A kind-1301 workout as a relay returns it."""
    return {
        "id": "5c1f0e",
        "pubkey": "a" * 64,
        "created_at": 1_700_000_600,
        "kind": 1301,
        "content": "Evening 5K",
        "tags": [
            ["exercise", "33401:" + "b" * 64 + ":uuid-running", "", "5", "km"],
            ["distance", "5", "km"],
            ["duration", "00:29:45"],
            ["room_id", "gantz-1700000000000-abcdefghi"],
            ["t", "running"],
        ],
        "sig": "00" * 64,
    }


@pytest.fixture
def relay_events(relay_workout) -> list:
    """Three events from two authors, out of chronological order."""
    return [
        {**relay_workout, "id": "late", "created_at": 1_700_000_900},
        {**relay_workout, "id": "early", "created_at": 1_700_000_100, "pubkey": "c" * 64},
        {**relay_workout, "id": "mid", "created_at": 1_700_000_500},
    ]
