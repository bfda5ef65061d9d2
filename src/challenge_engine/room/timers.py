"""Scheduled-callback services that drive room countdowns and polling.

The state machine owns every timer it creates and cancels them explicitly
on each transition; nothing here knows about rooms.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TimerService(ABC):
    """Injectable clock plus one-shot and repeating callbacks."""

    @abstractmethod
    def now(self) -> float:
        """Current time in unix seconds."""
        ...

    @abstractmethod
    def call_later(self, delay_s: float, callback: Callback) -> str:
        """Run *callback* once after *delay_s* seconds. Returns a handle."""
        ...

    @abstractmethod
    def call_every(self, interval_s: float, callback: Callback) -> str:
        """Run *callback* every *interval_s* seconds until cancelled."""
        ...

    @abstractmethod
    def cancel(self, handle: str) -> None:
        """Cancel a pending timer. Unknown or already-fired handles are ignored."""
        ...

    @abstractmethod
    def cancel_all(self) -> None:
        ...


class APSchedulerTimerService(TimerService):
    """TimerService backed by an APScheduler 3 scheduler.

    Defaults to a BackgroundScheduler started on construction. A
    BlockingScheduler may be passed instead; jobs added before its
    ``start()`` stay pending until the loop runs.
    """

    def __init__(self, scheduler: BaseScheduler | None = None) -> None:
        self._scheduler = scheduler or BackgroundScheduler()
        self._owns_scheduler = scheduler is None
        self._handles: set[str] = set()
        if self._owns_scheduler:
            self._scheduler.start()

    @property
    def scheduler(self) -> BaseScheduler:
        return self._scheduler

    def now(self) -> float:
        return time.time()

    def call_later(self, delay_s: float, callback: Callback) -> str:
        handle = uuid.uuid4().hex
        self._handles.add(handle)
        self._scheduler.add_job(
            self._run_once,
            "date",
            run_date=datetime.now(timezone.utc) + timedelta(seconds=delay_s),
            args=(handle, callback),
            id=handle,
            misfire_grace_time=None,
        )
        return handle

    def call_every(self, interval_s: float, callback: Callback) -> str:
        job = self._scheduler.add_job(
            callback,
            "interval",
            seconds=interval_s,
            coalesce=True,
            misfire_grace_time=None,
        )
        self._handles.add(job.id)
        return job.id

    def cancel(self, handle: str) -> None:
        self._handles.discard(handle)
        try:
            self._scheduler.remove_job(handle)
        except JobLookupError:
            pass  # already fired

    def cancel_all(self) -> None:
        for handle in list(self._handles):
            self.cancel(handle)

    def shutdown(self) -> None:
        """Cancel every timer and stop the scheduler if this service started it."""
        self.cancel_all()
        if self._owns_scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def _run_once(self, handle: str, callback: Callback) -> None:
        self._handles.discard(handle)
        callback()


class ManualTimerService(TimerService):
    """Virtual-clock TimerService advanced explicitly with :meth:`advance`.

    Callbacks run synchronously inside ``advance`` in due-time order, with
    the clock set to each callback's due time while it runs.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._queue: list[tuple[float, int, str]] = []
        self._timers: dict[str, tuple[Callback, float | None]] = {}
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_s: float, callback: Callback) -> str:
        return self._push(delay_s, callback, None)

    def call_every(self, interval_s: float, callback: Callback) -> str:
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        return self._push(interval_s, callback, interval_s)

    def cancel(self, handle: str) -> None:
        self._timers.pop(handle, None)

    def cancel_all(self) -> None:
        self._timers.clear()
        self._queue.clear()

    @property
    def pending(self) -> int:
        """Number of timers still scheduled."""
        return len(self._timers)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every timer that comes due."""
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            timer = self._timers.get(handle)
            if timer is None:
                continue  # cancelled
            callback, interval = timer
            self._now = due
            if interval is None:
                del self._timers[handle]
            else:
                heapq.heappush(self._queue, (due + interval, next(self._seq), handle))
            callback()
        self._now = target

    def _push(self, delay_s: float, callback: Callback, interval: float | None) -> str:
        seq = next(self._seq)
        handle = f"timer-{seq}"
        self._timers[handle] = (callback, interval)
        heapq.heappush(self._queue, (self._now + max(delay_s, 0.0), seq, handle))
        return handle
