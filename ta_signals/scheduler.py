"""
Job Scheduler.

Re-runs an analysis job on a fixed cadence anchored to a daily start
time (e.g. every 5 minutes from 09:16). Each run lands 30 seconds into
its minute so the candle that just closed is available.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

RUN_SECOND = 30


def next_run_time(
    now: datetime,
    initial_hour: int = 9,
    initial_minute: int = 16,
    interval_minutes: int = 5,
) -> datetime:
    """
    Compute the next run time.

    Before today's initial time, the next run is the initial time itself.
    Afterwards it is the next interval boundary counted from the initial
    time, at RUN_SECOND past the minute.

    Args:
        now: Current time
        initial_hour: Hour of the first run of the day
        initial_minute: Minute of the first run of the day
        interval_minutes: Minutes between runs
    """
    if interval_minutes <= 0:
        raise ValueError(f"interval_minutes must be positive, got: {interval_minutes}")

    initial_today = now.replace(hour=initial_hour, minute=initial_minute, second=0, microsecond=0)
    if now < initial_today:
        return initial_today

    minutes_since_initial = int((now - initial_today).total_seconds() // 60)
    minutes_to_next = interval_minutes - (minutes_since_initial % interval_minutes)
    next_run = now + timedelta(minutes=minutes_to_next)
    return next_run.replace(second=RUN_SECOND, microsecond=0)


class JobScheduler:
    """
    Runs a job periodically.

    The first run is at next_run_time(); every later run is
    interval_minutes after the previous scheduled time. A failing job is
    logged and does not stop the schedule.
    """

    def __init__(
        self,
        job: Callable[[], object],
        initial_hour: int = 9,
        initial_minute: int = 16,
        interval_minutes: int = 5,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the scheduler.

        Args:
            job: Callable (or coroutine function) to run
            initial_hour: Hour of the first run of the day
            initial_minute: Minute of the first run of the day
            interval_minutes: Minutes between runs
            clock: Source of the current time
        """
        if not callable(job):
            raise TypeError("job must be callable")
        if interval_minutes <= 0:
            raise ValueError(f"interval_minutes must be positive, got: {interval_minutes}")

        self.job = job
        self.initial_hour = initial_hour
        self.initial_minute = initial_minute
        self.interval_minutes = interval_minutes
        self.clock = clock

        self.next_run: datetime | None = None
        self.runs = 0
        self._stopped = False

    def stop(self) -> None:
        """Stop after the current wait or run."""
        self._stopped = True

    async def _run_job(self) -> None:
        logger.info(f"Job is running at: {self.clock():%Y-%m-%d %H:%M:%S}")
        try:
            result = self.job()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.exception(f"Scheduled job failed: {e}")
        self.runs += 1

    async def run(self, max_runs: int | None = None) -> None:
        """
        Run the schedule until stopped or max_runs jobs have executed.

        Args:
            max_runs: Stop after this many runs (None = forever)
        """
        self.next_run = next_run_time(
            self.clock(), self.initial_hour, self.initial_minute, self.interval_minutes
        )

        while not self._stopped and (max_runs is None or self.runs < max_runs):
            logger.info(f"Next job scheduled at: {self.next_run:%Y-%m-%d %H:%M:%S}")
            delay = (self.next_run - self.clock()).total_seconds()
            await asyncio.sleep(max(delay, 0.0))
            if self._stopped:
                break

            await self._run_job()
            self.next_run = self.next_run + timedelta(minutes=self.interval_minutes)
