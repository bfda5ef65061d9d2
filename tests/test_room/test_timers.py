"""Tests for the timer services."""

from unittest.mock import MagicMock

import pytest
from apscheduler.jobstores.base import JobLookupError

from challenge_engine.room.timers import APSchedulerTimerService, ManualTimerService


class TestManualTimerService:
    def test_call_later_fires_once_at_due_time(self):
        timers = ManualTimerService(start=100.0)
        seen = []
        timers.call_later(10, lambda: seen.append(timers.now()))
        timers.advance(9)
        assert seen == []
        timers.advance(1)
        assert seen == [110.0]
        timers.advance(100)
        assert seen == [110.0]
        assert timers.now() == 210.0

    def test_call_every_repeats(self):
        timers = ManualTimerService()
        seen = []
        timers.call_every(5, lambda: seen.append(timers.now()))
        timers.advance(16)
        assert seen == [5.0, 10.0, 15.0]
        assert timers.pending == 1

    def test_cancel(self):
        timers = ManualTimerService()
        seen = []
        handle = timers.call_later(1, lambda: seen.append("x"))
        timers.cancel(handle)
        timers.cancel("unknown-handle")
        timers.advance(5)
        assert seen == []
        assert timers.pending == 0

    def test_cancel_all(self):
        timers = ManualTimerService()
        timers.call_later(1, lambda: None)
        timers.call_every(1, lambda: None)
        timers.cancel_all()
        assert timers.pending == 0

    def test_callbacks_run_in_due_order(self):
        timers = ManualTimerService()
        seen = []
        timers.call_later(3, lambda: seen.append("late"))
        timers.call_later(1, lambda: seen.append("early"))
        timers.advance(5)
        assert seen == ["early", "late"]

    def test_callback_may_schedule_more_work(self):
        timers = ManualTimerService()
        seen = []
        timers.call_later(1, lambda: timers.call_later(1, lambda: seen.append(timers.now())))
        timers.advance(3)
        assert seen == [2.0]

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            ManualTimerService().call_every(0, lambda: None)


class TestAPSchedulerTimerService:
    def test_call_later_adds_date_job(self):
        scheduler = MagicMock()
        timers = APSchedulerTimerService(scheduler)
        callback = MagicMock()

        handle = timers.call_later(30, callback)

        args, kwargs = scheduler.add_job.call_args
        assert args[1] == "date"
        assert kwargs["id"] == handle
        assert kwargs["args"] == (handle, callback)
        scheduler.start.assert_not_called()

    def test_run_once_invokes_callback(self):
        timers = APSchedulerTimerService(MagicMock())
        callback = MagicMock()
        handle = timers.call_later(1, callback)
        timers._run_once(handle, callback)
        callback.assert_called_once_with()

    def test_call_every_adds_interval_job(self):
        scheduler = MagicMock()
        scheduler.add_job.return_value.id = "job-1"
        timers = APSchedulerTimerService(scheduler)

        handle = timers.call_every(30, MagicMock())

        assert handle == "job-1"
        args, kwargs = scheduler.add_job.call_args
        assert args[1] == "interval"
        assert kwargs["seconds"] == 30

    def test_cancel_ignores_fired_jobs(self):
        scheduler = MagicMock()
        scheduler.remove_job.side_effect = JobLookupError("gone")
        timers = APSchedulerTimerService(scheduler)
        timers.cancel("gone")
        scheduler.remove_job.assert_called_once_with("gone")

    def test_cancel_all_removes_tracked_jobs(self):
        scheduler = MagicMock()
        timers = APSchedulerTimerService(scheduler)
        first = timers.call_later(1, MagicMock())
        second = timers.call_later(2, MagicMock())
        timers.cancel_all()
        removed = {c.args[0] for c in scheduler.remove_job.call_args_list}
        assert removed == {first, second}
