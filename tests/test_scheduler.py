"""Tests for the live recompute scheduler."""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from satlook.core.errors import PropagationError, TrackingError
from satlook.core.frames import GeodeticPosition, PositionResult
from satlook.core.observer import LIVE, ObserverLocation, TimeSelector, TrackingContext
from satlook.core.scheduler import LiveScheduler, SchedulerState

INTERVAL = 0.01
FIXED = datetime(2024, 2, 14, 14, 0, tzinfo=timezone.utc)
NOW = datetime(2024, 2, 14, 12, 0, tzinfo=timezone.utc)


def _result(when: datetime, azimuth: float = 0.0) -> PositionResult:
    return PositionResult(
        azimuth=azimuth,
        elevation=10.0,
        range_km=1000.0,
        right_ascension=10.0,
        declination=5.0,
        geodetic=GeodeticPosition(0.0, 0.0, 400.0),
        position_ecf=(7000.0, 0.0, 0.0),
        timestamp=when,
    )


class FakeCompute:
    """Records every call; optionally fails on selected call numbers."""

    def __init__(self, fail_on: set[int] | None = None, error: Exception | None = None) -> None:
        self.calls: list[tuple[ObserverLocation, datetime]] = []
        self.fail_on = fail_on or set()
        self.error = error or PropagationError(6, "Satellite has decayed")

    def __call__(self, observer: ObserverLocation, when: datetime) -> PositionResult:
        self.calls.append((observer, when))
        if len(self.calls) in self.fail_on:
            raise self.error
        return _result(when, azimuth=float(len(self.calls)))


def _scheduler(compute: FakeCompute, context: TrackingContext | None = None, **kwargs) -> LiveScheduler:
    return LiveScheduler(compute, context, interval=INTERVAL, clock=lambda: NOW, **kwargs)


def test_start_recomputes_immediately_then_periodically():
    async def scenario():
        compute = FakeCompute()
        scheduler = _scheduler(compute)
        assert scheduler.state is SchedulerState.PAUSED
        assert scheduler.start() is True
        assert scheduler.state is SchedulerState.RUNNING
        assert len(compute.calls) == 1
        await asyncio.sleep(INTERVAL * 10)
        assert len(compute.calls) >= 3
        assert scheduler.latest.azimuth == float(len(compute.calls))
        scheduler.close()

    asyncio.run(scenario())


def test_no_ticks_after_pause():
    async def scenario():
        compute = FakeCompute()
        scheduler = _scheduler(compute)
        scheduler.start()
        await asyncio.sleep(INTERVAL * 3)
        scheduler.pause()
        assert scheduler.state is SchedulerState.PAUSED
        count = len(compute.calls)
        await asyncio.sleep(INTERVAL * 10)
        assert len(compute.calls) == count

        scheduler.start()
        assert len(compute.calls) == count + 1
        scheduler.close()

    asyncio.run(scenario())


def test_start_twice_keeps_one_timer():
    async def scenario():
        compute = FakeCompute()
        scheduler = _scheduler(compute)
        scheduler.start()
        assert scheduler.start() is True
        assert len(compute.calls) == 1
        scheduler.close()

    asyncio.run(scenario())


def test_fixed_time_pauses_and_refuses_start():
    async def scenario():
        compute = FakeCompute()
        scheduler = _scheduler(compute)
        scheduler.start()
        scheduler.select_time(TimeSelector.at(FIXED))
        assert scheduler.state is SchedulerState.PAUSED
        assert compute.calls[-1][1] == FIXED
        assert scheduler.latest.timestamp == FIXED

        count = len(compute.calls)
        assert scheduler.start() is False
        await asyncio.sleep(INTERVAL * 5)
        assert len(compute.calls) == count

        scheduler.select_time(LIVE)
        assert scheduler.state is SchedulerState.PAUSED
        assert scheduler.start() is True
        assert compute.calls[-1][1] == NOW
        scheduler.close()

    asyncio.run(scenario())


def test_fixed_context_at_construction_refuses_start():
    compute = FakeCompute()
    scheduler = _scheduler(compute, TrackingContext(time=TimeSelector.at(FIXED)))
    assert scheduler.start() is False
    assert compute.calls == []


def test_failed_tick_keeps_previous_result_and_keeps_running():
    async def scenario():
        compute = FakeCompute(fail_on={2})
        errors: list[TrackingError] = []
        scheduler = _scheduler(compute, on_error=errors.append)
        scheduler.start()
        first = scheduler.latest
        while len(compute.calls) < 2:
            await asyncio.sleep(INTERVAL)
        assert len(errors) == 1
        assert errors[0].code == 6
        assert scheduler.running
        if len(compute.calls) == 2:
            assert scheduler.latest is first
        while len(compute.calls) < 3:
            await asyncio.sleep(INTERVAL)
        assert scheduler.latest.azimuth >= 3.0
        scheduler.close()

    asyncio.run(scenario())


def test_unexpected_compute_error_does_not_stop_updates():
    async def scenario():
        compute = FakeCompute(fail_on={2}, error=ValueError("boom"))
        scheduler = _scheduler(compute)
        scheduler.start()
        while len(compute.calls) < 4:
            await asyncio.sleep(INTERVAL)
        assert scheduler.running
        assert not scheduler._task.done()
        assert scheduler.latest.azimuth >= 3.0
        scheduler.close()

    asyncio.run(scenario())


def test_failing_result_callback_does_not_stop_updates():
    async def scenario():
        compute = FakeCompute()
        published: list[PositionResult] = []

        def on_result(result: PositionResult) -> None:
            published.append(result)
            if len(published) > 1:
                raise RuntimeError("display went away")

        scheduler = _scheduler(compute, on_result=on_result)
        scheduler.start()
        await asyncio.sleep(INTERVAL * 10)
        assert len(published) >= 3
        assert not scheduler._task.done()
        scheduler.close()

    asyncio.run(scenario())


def test_results_published_to_callback():
    async def scenario():
        published: list[PositionResult] = []
        scheduler = _scheduler(FakeCompute(), on_result=published.append)
        scheduler.start()
        await asyncio.sleep(INTERVAL * 4)
        scheduler.close()
        assert published
        assert published[-1] is scheduler.latest

    asyncio.run(scenario())


def test_context_swap_used_by_next_tick():
    compute = FakeCompute()
    scheduler = _scheduler(compute)
    observer = ObserverLocation(10.0, 20.0, 0.5, name="Site")
    scheduler.update_context(TrackingContext(observer=observer))
    scheduler.recompute()
    assert compute.calls[-1][0] is observer


def test_start_requires_event_loop():
    scheduler = _scheduler(FakeCompute())
    with pytest.raises(RuntimeError):
        scheduler.start()
    assert scheduler.state is SchedulerState.PAUSED


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        LiveScheduler(FakeCompute(), interval=0)
