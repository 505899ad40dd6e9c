"""
Unit tests for the periodic job scheduler.
"""

import asyncio
from datetime import datetime, timedelta

import pytest

from ta_signals.scheduler import JobScheduler, next_run_time


class FakeClock:
    """Clock that returns a start time, then jumps far ahead."""

    def __init__(self, start: datetime):
        self.now = start
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        if self.calls == 1:
            return self.now
        # Every later read is past any scheduled run so sleeps are zero
        return self.now + timedelta(days=1)


class TestNextRunTime:
    """Tests for run time calculation."""

    def test_before_initial_time(self) -> None:
        """Before the daily start, the start itself is next."""
        now = datetime(2026, 1, 5, 8, 0, 12)
        assert next_run_time(now, 9, 16, 5) == datetime(2026, 1, 5, 9, 16)

    def test_exactly_at_initial_time(self) -> None:
        """At the start, the next interval boundary follows."""
        now = datetime(2026, 1, 5, 9, 16)
        assert next_run_time(now, 9, 16, 5) == datetime(2026, 1, 5, 9, 21, 30)

    def test_mid_interval(self) -> None:
        """Seven minutes after the start with a 5 minute interval runs at +10."""
        now = datetime(2026, 1, 5, 9, 23, 10)
        assert next_run_time(now, 9, 16, 5) == datetime(2026, 1, 5, 9, 26, 30)

    def test_invalid_interval(self) -> None:
        with pytest.raises(ValueError):
            next_run_time(datetime(2026, 1, 5), interval_minutes=0)


class TestJobScheduler:
    """Tests for the asyncio scheduler loop."""

    def test_non_callable_job(self) -> None:
        with pytest.raises(TypeError):
            JobScheduler("not a function")  # type: ignore[arg-type]

    def test_runs_and_advances(self) -> None:
        """Each run advances the schedule by one interval."""
        calls: list[int] = []
        clock = FakeClock(datetime(2026, 1, 5, 8, 0))
        scheduler = JobScheduler(lambda: calls.append(1), 9, 16, 5, clock=clock)

        asyncio.run(scheduler.run(max_runs=3))

        assert len(calls) == 3
        assert scheduler.runs == 3
        assert scheduler.next_run == datetime(2026, 1, 5, 9, 31)

    def test_failing_job_does_not_stop_schedule(self) -> None:
        """Exceptions from the job are logged and the schedule continues."""
        attempts: list[int] = []

        def job() -> None:
            attempts.append(1)
            raise RuntimeError("boom")

        scheduler = JobScheduler(job, clock=FakeClock(datetime(2026, 1, 5, 8, 0)))
        asyncio.run(scheduler.run(max_runs=2))

        assert len(attempts) == 2

    def test_coroutine_job(self) -> None:
        """Coroutine functions are awaited."""
        done: list[bool] = []

        async def job() -> None:
            done.append(True)

        scheduler = JobScheduler(job, clock=FakeClock(datetime(2026, 1, 5, 8, 0)))
        asyncio.run(scheduler.run(max_runs=1))

        assert done == [True]

    def test_stop(self) -> None:
        """stop() ends the loop after the current run."""
        scheduler: JobScheduler

        def job() -> None:
            scheduler.stop()

        scheduler = JobScheduler(job, clock=FakeClock(datetime(2026, 1, 5, 8, 0)))
        asyncio.run(scheduler.run())

        assert scheduler.runs == 1
