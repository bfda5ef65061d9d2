"""Room orchestration: state machine, timer services and collaborator ports."""

from challenge_engine.room.ports import EventPublisher, EventSource
from challenge_engine.room.state_machine import RoomConfig, RoomStateMachine
from challenge_engine.room.timers import (
    APSchedulerTimerService,
    ManualTimerService,
    TimerService,
)

__all__ = [
    "APSchedulerTimerService",
    "EventPublisher",
    "EventSource",
    "ManualTimerService",
    "RoomConfig",
    "RoomStateMachine",
    "TimerService",
]
