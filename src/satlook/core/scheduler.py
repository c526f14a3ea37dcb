"""Live position recomputation on a fixed cadence.

The scheduler is a two-state machine (running / paused) driven by a single
``asyncio`` task. The time selector in the tracking context is orthogonal
to that state: a pinned time forces the scheduler into the paused state and
refuses ``start()`` until live time is selected again.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from enum import Enum

from satlook.core.errors import TrackingError
from satlook.core.frames import PositionResult
from satlook.core.observer import ObserverLocation, TimeSelector, TrackingContext
from satlook.utils.constants import DEFAULT_UPDATE_INTERVAL_S

logger = logging.getLogger(__name__)

Compute = Callable[[ObserverLocation, datetime], PositionResult]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SchedulerState(Enum):
    RUNNING = "running"
    PAUSED = "paused"


class LiveScheduler:
    """Recompute a satellite position periodically and publish the latest result.

    Args:
        compute: Callable taking an observer and an instant and returning a
            PositionResult (propagation + transform).
        context: Initial observer/time context.
        interval: Seconds between recomputes while running.
        on_result: Called with every newly published result.
        on_error: Called with the error of every failed recompute.
        clock: Source of the current time for live recomputes.
    """

    def __init__(
        self,
        compute: Compute,
        context: TrackingContext | None = None,
        *,
        interval: float = DEFAULT_UPDATE_INTERVAL_S,
        on_result: Callable[[PositionResult], None] | None = None,
        on_error: Callable[[TrackingError], None] | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._compute = compute
        self._context = context or TrackingContext()
        self._interval = interval
        self._on_result = on_result
        self._on_error = on_error
        self._clock = clock
        self._state = SchedulerState.PAUSED
        self._task: asyncio.Task | None = None
        self.latest: PositionResult | None = None
        self.last_error: TrackingError | None = None
        self.ticks = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is SchedulerState.RUNNING

    @property
    def context(self) -> TrackingContext:
        return self._context

    @property
    def interval(self) -> float:
        return self._interval

    def recompute(self) -> PositionResult | None:
        """Compute and publish one result for the current context.

        Failures are logged and reported to ``on_error``; the previously
        published result is kept.

        Returns:
            The new result, or None if the recompute failed.
        """
        context = self._context
        when = context.time.resolve(self._clock())
        try:
            result = self._compute(context.observer, when)
        except TrackingError as e:
            logger.warning("Live update failed at %s: %s", when.isoformat(), e)
            self.last_error = e
            if self._on_error is not None:
                self._on_error(e)
            return None

        self.ticks += 1
        self.latest = result
        self.last_error = None
        if self._on_result is not None:
            self._on_result(result)
        return result

    def start(self) -> bool:
        """Resume live updates: recompute now, then every ``interval`` seconds.

        Must be called from a running event loop.

        Returns:
            False if refused because a fixed time is selected, else True.
        """
        if not self._context.time.is_live:
            logger.warning("Live updates disabled while a custom time is selected")
            return False
        if self.running:
            return True

        loop = asyncio.get_running_loop()
        self._state = SchedulerState.RUNNING
        self.recompute()
        self._task = loop.create_task(self._run())
        logger.debug("Live updates started (every %.2f s)", self._interval)
        return True

    def pause(self) -> None:
        """Stop live updates; no recompute happens until ``start()``."""
        self._cancel()
        if self.running:
            logger.debug("Live updates paused")
        self._state = SchedulerState.PAUSED

    def close(self) -> None:
        """Tear down the scheduler, cancelling any armed timer."""
        self.pause()

    def update_context(self, context: TrackingContext) -> None:
        """Swap in a new observer/time context.

        Selecting a fixed time pauses live updates and publishes the position
        at that instant. Returning to live time leaves the scheduler paused.
        """
        self._context = context
        if not context.time.is_live:
            self.pause()
            self.recompute()

    def select_time(self, selector: TimeSelector) -> None:
        self.update_context(replace(self._context, time=selector))

    def _cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        # Sequential compute -> sleep; a slow tick delays the next one.
        while self._state is SchedulerState.RUNNING:
            await asyncio.sleep(self._interval)
            if self._state is not SchedulerState.RUNNING:
                break
            try:
                self.recompute()
            except Exception:
                logger.exception("Unexpected error during live update; continuing")
