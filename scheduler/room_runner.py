"""Room runner — verifies a room once, or keeps rooms cycling as a daemon.

Usage:
    python -m scheduler.room_runner --once --level 4 --start-ms 1700000000000 \
        --participants <pubkey> <pubkey> [--room-id gantz-...]
    python -m scheduler.room_runner --daemon
"""

from __future__ import annotations

import argparse
import logging

import numpy as np

from challenge_engine.models.enums import ParticipantState, RoomPhase
from challenge_engine.models.room import ParticipantStatus, RoomState
from challenge_engine.room import (
    APSchedulerTimerService,
    ManualTimerService,
    RoomConfig,
    RoomStateMachine,
)
from nostr_client import JsonFileRelay, NostrClient, TTLCache

from scheduler.config import (
    CHALLENGE_HOURS,
    COUNTDOWN_S,
    EVENTS_PATH,
    POLL_INTERVAL_S,
    RANDOM_SEED,
    REFORM_DELAY_S,
    ROOM_SIZE_TARGET,
)

logger = logging.getLogger(__name__)


def build_config(reform: bool = True) -> RoomConfig:
    """RoomConfig from the environment."""
    return RoomConfig(
        room_size=ROOM_SIZE_TARGET,
        countdown_s=COUNTDOWN_S,
        challenge_hours=CHALLENGE_HOURS,
        poll_interval_s=POLL_INTERVAL_S,
        reform_delay_s=REFORM_DELAY_S if reform else None,
        announce=True,
    )


def build_client(relay: JsonFileRelay) -> NostrClient:
    return NostrClient(relay.fetch, relay.publish, cache=TTLCache())


def sweep_once(
    level: int,
    start_ms: int,
    participants: list[str],
    room_id: str = "",
    relay: JsonFileRelay | None = None,
) -> RoomState:
    """Run a single verification sweep for an existing room and log the outcome."""
    relay = relay or JsonFileRelay(EVENTS_PATH)
    timers = ManualTimerService(start=start_ms / 1000)
    machine = RoomStateMachine(
        build_client(relay),
        publisher=None,
        timers=timers,
        config=build_config(reform=False),
        rng=np.random.default_rng(RANDOM_SEED),
    )
    machine.state = RoomState(
        room_id=room_id,
        participants=list(participants),
        current_level=level,
        phase=RoomPhase.CHALLENGE,
        challenge_started_at_ms=start_ms,
        participant_status={p: ParticipantStatus() for p in participants},
    )

    state = machine.run_verification_sweep()
    machine.shutdown()

    if machine.last_feed is not None:
        summary = machine.last_feed.summary
        logger.info(
            "Feed: %d events, %d valid, %d/%d participants completed",
            summary.total_events,
            summary.valid_events,
            summary.completed_participants,
            summary.total_participants,
        )
    for author, status in state.participant_status.items():
        outcome = "eliminated" if status.status == ParticipantState.ELIMINATED else "advanced"
        logger.info("%s: %s", author, outcome)
    logger.info("Room is %s at level %d", state.phase.name, state.current_level)
    return state


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = argparse.ArgumentParser(description="Gantz challenge room runner")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run one verification sweep and exit")
    group.add_argument("--daemon", action="store_true", help="Run the room loop on APScheduler")
    parser.add_argument("--level", type=int, default=1, help="Challenge level being verified")
    parser.add_argument("--start-ms", type=int, help="Challenge start (unix ms)")
    parser.add_argument("--participants", nargs="+", default=[], help="Participant public keys")
    parser.add_argument("--room-id", default="", help="Room id the workouts are tagged with")
    args = parser.parse_args()

    if args.once:
        if args.start_ms is None or not args.participants:
            parser.error("--once requires --start-ms and --participants")
        sweep_once(args.level, args.start_ms, args.participants, args.room_id)
        return

    from apscheduler.schedulers.blocking import BlockingScheduler

    scheduler = BlockingScheduler()
    timers = APSchedulerTimerService(scheduler)
    relay = JsonFileRelay(EVENTS_PATH)
    client = build_client(relay)
    machine = RoomStateMachine(
        client,
        publisher=client,
        timers=timers,
        config=build_config(),
        rng=np.random.default_rng(RANDOM_SEED),
    )
    timers.call_later(0, machine.form_room)
    logger.info("Room loop started, events from %s", EVENTS_PATH)
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        machine.shutdown()
        logger.info("Room loop stopped")


if __name__ == "__main__":
    main()
