"""Fixtures for driving RoomStateMachine on a virtual clock."""

from __future__ import annotations

import numpy as np
import pytest

from challenge_engine.room import ManualTimerService, RoomConfig, RoomStateMachine

from room_fakes import FakeEventSource, FakePublisher

START_S = 1_700_000_000.0


@pytest.fixture
def timers() -> ManualTimerService:
    return ManualTimerService(start=START_S)


@pytest.fixture
def source(make_event) -> FakeEventSource:
    """Six distinct authors with one old workout each."""
    return FakeEventSource(
        [
            make_event(author=f"user{i}", created_at=int(START_S) - 3600 + i, content="Morning run")
            for i in range(6)
        ]
    )


@pytest.fixture
def publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture
def config() -> RoomConfig:
    return RoomConfig(poll_interval_s=600)


@pytest.fixture
def machine(source, publisher, timers, config) -> RoomStateMachine:
    return RoomStateMachine(
        source,
        publisher=publisher,
        timers=timers,
        config=config,
        rng=np.random.default_rng(0),
    )
