"""Room progression state machine.

WAITING → FORMED → CHALLENGE → (FORMED at the next level | WAITING).

A room forms from a random sample of recent workout authors, counts down,
runs a timed challenge and then sweeps the feed: verified participants
advance together, everyone else is eliminated. Progression only ever reads
verified workout records; announcement notes are published optimistically
and never consulted.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

import numpy as np

from challenge_engine.announcements import (
    challenge_result_draft,
    generate_room_id,
    room_formation_draft,
    verification_draft,
)
from challenge_engine.catalog import clamp_level
from challenge_engine.exceptions import RoomStateError
from challenge_engine.feed import build_challenge_feed
from challenge_engine.models.enums import (
    CHALLENGE_WINDOW_HOURS,
    FEED_POLL_INTERVAL_S,
    MAX_LEVEL,
    MIN_ROOM_SIZE,
    POOL_FETCH_LIMIT,
    PREP_COUNTDOWN_S,
    ROOM_SIZE,
    SWEEP_FETCH_LIMIT,
    WORKOUT_EVENT_KIND,
    ParticipantState,
    RoomPhase,
)
from challenge_engine.models.event import EventDraft, EventFilter, PublishResult
from challenge_engine.models.feed import ChallengeFeed
from challenge_engine.models.room import ParticipantStatus, RoomState
from challenge_engine.models.workout import WorkoutFacts
from challenge_engine.room.ports import EventPublisher, EventSource
from challenge_engine.room.timers import APSchedulerTimerService, TimerService
from challenge_engine.validator import ChallengeValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomConfig:
    """Tunables for one room loop."""

    room_size: int = ROOM_SIZE
    min_room_size: int = MIN_ROOM_SIZE
    countdown_s: float = PREP_COUNTDOWN_S
    challenge_hours: float = CHALLENGE_WINDOW_HOURS
    poll_interval_s: float = FEED_POLL_INTERVAL_S
    pool_fetch_limit: int = POOL_FETCH_LIMIT
    sweep_fetch_limit: int = SWEEP_FETCH_LIMIT
    reform_delay_s: float | None = None  # None disables automatic re-forming
    announce: bool = False

    @property
    def challenge_s(self) -> float:
        return self.challenge_hours * 3600


class RoomStateMachine:
    """Drives one room through formation, challenge and verification.

    Every public operation and every timer callback runs under a re-entrant
    lock. Each scheduled callback remembers the room id and generation it
    was created for; once the room re-forms or transitions, stale callbacks
    are ignored.

    Usage:
        machine = RoomStateMachine(source, timers=ManualTimerService(now))
        machine.form_room()
        timers.advance(machine.config.countdown_s)   # -> CHALLENGE
    """

    def __init__(
        self,
        event_source: EventSource,
        publisher: EventPublisher | None = None,
        timers: TimerService | None = None,
        config: RoomConfig | None = None,
        rng: np.random.Generator | None = None,
        validator: ChallengeValidator | None = None,
    ) -> None:
        self.config = config or RoomConfig()
        self._source = event_source
        self._publisher = publisher
        self._timers = timers or APSchedulerTimerService()
        self._rng = rng or np.random.default_rng()
        self._validator = validator or ChallengeValidator()

        self.state = RoomState()
        self.last_feed: ChallengeFeed | None = None
        self._lock = threading.RLock()
        self._generation = 0
        self._handles: list[str] = []

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def form_room(self) -> RoomState:
        """Sample a new roster from recent workout authors and start the countdown.

        The new room keeps the current level. An empty candidate pool or a
        failed pool query leaves the room WAITING.
        """
        with self._lock:
            self._cancel_timers()
            level = self.state.current_level

            try:
                events = self._source.fetch_events(
                    EventFilter(
                        kinds=frozenset({WORKOUT_EVENT_KIND}),
                        limit=self.config.pool_fetch_limit,
                    )
                )
            except Exception as exc:
                logger.error("Candidate pool query failed; room stays WAITING: %s", exc)
                events = []

            pool = list(dict.fromkeys(e.author for e in events))
            if not pool:
                logger.info("No workout authors found; room stays WAITING")
                self.state = RoomState(current_level=level)
                self._schedule_reform()
                return self.state

            participants = self._sample(pool)
            now_ms = self._now_ms()
            self.state = RoomState(
                room_id=generate_room_id(now_ms, self._rng),
                participants=participants,
                current_level=level,
                phase=RoomPhase.FORMED,
                participant_status={p: ParticipantStatus() for p in participants},
            )
            self.last_feed = None
            logger.info(
                "Formed room %s at level %d with %d participants (pool of %d)",
                self.state.room_id,
                level,
                len(participants),
                len(pool),
            )
            self._announce(
                room_formation_draft(participants, level, self.state.room_id, now=self._timers.now())
            )
            self._schedule(self.config.countdown_s, self.start_challenge)
            return self.state

    def start_challenge(self) -> RoomState:
        """FORMED → CHALLENGE: record the start time and arm the timeout and poll."""
        with self._lock:
            if self.state.phase != RoomPhase.FORMED:
                raise RoomStateError(f"Cannot start challenge from phase {self.state.phase.name}")

            self._cancel_timers()
            self.state.phase = RoomPhase.CHALLENGE
            self.state.challenge_started_at_ms = self._now_ms()
            logger.info(
                "Room %s: level %d challenge started (%.1fh window)",
                self.state.room_id,
                self.state.current_level,
                self.config.challenge_hours,
            )
            self._schedule(self.config.challenge_s, self.run_verification_sweep)
            self._schedule(self.config.poll_interval_s, self.poll, repeating=True)
            return self.state

    def poll(self) -> ChallengeFeed | None:
        """Refresh the feed and mark participants who already qualified.

        Never advances the room. Fetch failures are logged and skipped.
        """
        with self._lock:
            if self.state.phase != RoomPhase.CHALLENGE:
                return None
            try:
                feed = self._fetch_feed()
            except Exception as exc:
                logger.warning("Room %s: feed poll failed: %s", self.state.room_id, exc)
                return None

            for author, status in feed.participant_status.items():
                participant = self.state.participant_status.get(author)
                if participant is None or participant.status == ParticipantState.ELIMINATED:
                    continue
                if status.events:
                    participant.last_activity_at = max(e.created_at for e in status.events)
                if status.has_completed and participant.status != ParticipantState.COMPLETED:
                    participant.status = ParticipantState.COMPLETED
                    logger.info(
                        "Room %s: %s completed level %d",
                        self.state.room_id,
                        author,
                        self.state.current_level,
                    )
            self.last_feed = feed
            return feed

    def run_verification_sweep(self) -> RoomState:
        """Challenge timeout: advance the verified, eliminate everyone else."""
        with self._lock:
            if self.state.phase != RoomPhase.CHALLENGE:
                raise RoomStateError(f"No challenge running (phase {self.state.phase.name})")

            try:
                feed = self._fetch_feed(fresh=True)
            except Exception as exc:
                logger.error(
                    "Room %s: verification sweep failed, retrying in %ss: %s",
                    self.state.room_id,
                    self.config.poll_interval_s,
                    exc,
                )
                self._schedule(self.config.poll_interval_s, self.run_verification_sweep)
                return self.state

            self.last_feed = feed
            self._cancel_timers()
            level = self.state.current_level
            active = self.state.active_participants()
            verified = [p for p in active if feed.participant_status[p].has_completed]
            failed = [p for p in active if p not in verified]

            for author in active:
                self._announce_verdict(author, level, feed, verified=author in verified)

            for author in failed:
                self.state.participant_status[author].status = ParticipantState.ELIMINATED

            if not verified:
                logger.info("Room %s: nobody completed level %d; room closed", self.state.room_id, level)
                self.state.phase = RoomPhase.WAITING
                self.state.challenge_started_at_ms = None
                self._schedule_reform()
                return self.state

            for author in verified:
                status = self.state.participant_status[author]
                status.completed_levels.append(level)
                status.status = ParticipantState.ACTIVE

            if level >= MAX_LEVEL:
                logger.warning("Room %s: level %d cleared, repeating final level", self.state.room_id, level)
            next_level = clamp_level(level + 1)
            logger.info(
                "Room %s: %d/%d advanced to level %d, %d eliminated",
                self.state.room_id,
                len(verified),
                len(active),
                next_level,
                len(failed),
            )
            self.state.participants = verified
            self.state.current_level = next_level
            self.state.phase = RoomPhase.FORMED
            self.state.challenge_started_at_ms = None
            self._schedule(self.config.countdown_s, self.start_challenge)
            return self.state

    def eliminate(self, author: str) -> RoomState:
        """Remove *author* from the room. Too few survivors closes the room."""
        with self._lock:
            status = self.state.participant_status.get(author)
            if status is None:
                raise RoomStateError(f"{author} is not a participant of room {self.state.room_id!r}")
            if status.status == ParticipantState.ELIMINATED:
                return self.state

            status.status = ParticipantState.ELIMINATED
            self.state.participants = [p for p in self.state.participants if p != author]
            logger.info("Room %s: eliminated %s", self.state.room_id, author)

            remaining = len(self.state.active_participants())
            if self.state.phase != RoomPhase.WAITING and remaining < self.config.min_room_size:
                logger.info(
                    "Room %s: only %d participants left; room closed",
                    self.state.room_id,
                    remaining,
                )
                self._cancel_timers()
                self.state.phase = RoomPhase.WAITING
                self.state.challenge_started_at_ms = None
                self._schedule_reform()
            return self.state

    def report_completion(self, author: str, facts: WorkoutFacts | None = None) -> PublishResult:
        """Publish a result note for *author*. Failures are logged, not raised.

        Authoritative room state is untouched either way.
        """
        with self._lock:
            if self._publisher is None:
                return PublishResult(success=False, error="No publisher configured")
            if author not in self.state.participant_status:
                logger.warning("Ignoring completion report from non-participant %s", author)
                return PublishResult(success=False, error=f"{author} is not a participant")
            draft = challenge_result_draft(
                self.state.current_level,
                completed=True,
                room_id=self.state.room_id or None,
                facts=facts,
                now=self._timers.now(),
            )
            return self._publish(draft)

    def shutdown(self) -> None:
        """Cancel every pending timer owned by this machine."""
        with self._lock:
            self._cancel_timers()
            logger.info("Room %s: shut down", self.state.room_id or "<none>")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _sample(self, pool: list[str]) -> list[str]:
        if len(pool) <= self.config.room_size:
            return list(pool)
        picks = self._rng.choice(len(pool), size=self.config.room_size, replace=False)
        return [pool[int(i)] for i in picks]

    def _fetch_feed(self, fresh: bool = False) -> ChallengeFeed:
        started_ms = self.state.challenge_started_at_ms
        participants = self.state.active_participants()
        events = self._source.fetch_events(
            EventFilter(
                kinds=frozenset({WORKOUT_EVENT_KIND}),
                authors=frozenset(participants),
                since=started_ms // 1000,
                limit=self.config.sweep_fetch_limit,
            ),
            fresh=fresh,
        )
        return build_challenge_feed(
            events,
            participants,
            self.state.current_level,
            started_ms,
            room_id=self.state.room_id or None,
            validator=self._validator,
            now_ms=self._now_ms(),
        )

    def _now_ms(self) -> int:
        return int(self._timers.now() * 1000)

    def _schedule(self, delay_s: float, fn: Callable[[], object], repeating: bool = False) -> None:
        generation = self._generation
        room_id = self.state.room_id

        def fire() -> None:
            with self._lock:
                if generation != self._generation or room_id != self.state.room_id:
                    logger.debug("Ignoring stale %s for room %s", fn.__name__, room_id)
                    return
                fn()

        if repeating:
            handle = self._timers.call_every(delay_s, fire)
        else:
            handle = self._timers.call_later(delay_s, fire)
        self._handles.append(handle)

    def _schedule_reform(self) -> None:
        if self.config.reform_delay_s is not None:
            self._schedule(self.config.reform_delay_s, self.form_room)

    def _cancel_timers(self) -> None:
        self._generation += 1
        for handle in self._handles:
            self._timers.cancel(handle)
        self._handles.clear()

    def _announce(self, draft: EventDraft) -> None:
        if self.config.announce and self._publisher is not None:
            self._publish(draft)

    def _announce_verdict(self, author: str, level: int, feed: ChallengeFeed, verified: bool) -> None:
        if not (self.config.announce and self._publisher is not None):
            return
        latest = feed.participant_status[author].latest_event
        facts = latest.verification.facts if latest is not None else None
        errors = latest.verification.errors if latest is not None and not verified else ()
        self._publish(verification_draft(author, level, verified, errors, facts, now=self._timers.now()))

    def _publish(self, draft: EventDraft) -> PublishResult:
        try:
            result = self._publisher.publish(draft)
        except Exception as exc:
            logger.warning("Publish failed: %s", exc)
            return PublishResult(success=False, error=str(exc))
        if not result.success:
            logger.warning("Publish failed: %s", result.error)
        return result

