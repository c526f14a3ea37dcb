"""End-to-end tracking: raw element text in, observer-relative position out.

:class:`Tracker` wires format detection, validation, element building,
propagation and frame transforms together for one satellite.
:class:`TrackingSession` is the host-facing controller: it owns the
observer/time context and the live scheduler, and reports failures as
values instead of raising them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime

from sgp4.api import Satrec

from satlook.core.elements import CanonicalElements, build_elements
from satlook.core.errors import TrackingError, UnrecognizedFormatError
from satlook.core.formats import InputFormat, detect_format
from satlook.core.frames import PositionResult, earth_satellite, transform
from satlook.core.observer import (
    DEFAULT_OBSERVER,
    LIVE,
    ObserverLocation,
    TimeSelector,
    TrackingContext,
)
from satlook.core.propagation import initialize, propagate
from satlook.core.scheduler import LiveScheduler
from satlook.utils.constants import DEFAULT_UPDATE_INTERVAL_S

logger = logging.getLogger(__name__)


class Tracker:
    """A single satellite ready for repeated propagation.

    Attributes:
        elements: Canonical elements the tracker was built from.
        satrec: Initialized sgp4 record.
        satellite: The record wrapped for skyfield frame conversions.
    """

    def __init__(self, elements: CanonicalElements) -> None:
        self.elements = elements
        self.satrec: Satrec = initialize(elements)
        self.satellite = earth_satellite(self.satrec, elements.name)

    @classmethod
    def from_text(cls, text: str) -> Tracker:
        """Build a tracker from raw TLE, OMM-JSON or OMM-KVN text.

        Raises:
            UnrecognizedFormatError: If the text matches no accepted format.
            InvalidTleError: If a TLE fails validation.
            InvalidOmmError: If an OMM message fails decoding or validation.
            PropagationError: If SGP4 rejects the elements.
        """
        if not text or not text.strip():
            raise UnrecognizedFormatError("Please enter TLE or OMM data")
        detection = detect_format(text)
        if detection.format is InputFormat.UNRECOGNIZED:
            logger.error("Unrecognized input format")
            raise UnrecognizedFormatError()
        return cls(build_elements(detection))

    @property
    def name(self) -> str:
        return self.elements.name

    def compute(self, observer: ObserverLocation, when: datetime) -> PositionResult:
        """Propagate to ``when`` and transform for ``observer``.

        Raises:
            PropagationError: If SGP4 fails at ``when``.
            TransformFailure: If the resulting coordinates are not finite.
        """
        state = propagate(self.satrec, when)
        return transform(state.position_km, when, observer, self.satellite)


def track(text: str, context: TrackingContext | None = None, now: datetime | None = None) -> PositionResult:
    """One-shot position of the satellite described by ``text``.

    Args:
        text: Raw TLE, OMM-JSON or OMM-KVN text.
        context: Observer and time selection (default site, live time).
        now: Current time used when the time selector is live.

    Returns:
        The computed PositionResult.

    Raises:
        TrackingError: Any pipeline failure.
    """
    context = context or TrackingContext()
    tracker = Tracker.from_text(text)
    return tracker.compute(context.observer, context.time.resolve(now))


@dataclass(frozen=True)
class Submission:
    """Outcome of submitting element text to a session.

    Exactly one of ``result`` and ``error`` is set.
    """

    result: PositionResult | None = None
    error: TrackingError | None = None
    tracker: Tracker | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is None:
            return ""
        return str(self.error)


class TrackingSession:
    """Controller for one tracked satellite at a time.

    Args:
        context: Initial observer/time context.
        interval: Live update interval in seconds.
        clock: Source of the current time for live updates.
    """

    def __init__(
        self,
        context: TrackingContext | None = None,
        *,
        interval: float = DEFAULT_UPDATE_INTERVAL_S,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._context = context or TrackingContext()
        self._interval = interval
        self._clock = clock
        self._scheduler: LiveScheduler | None = None

    @property
    def context(self) -> TrackingContext:
        return self._context

    @property
    def scheduler(self) -> LiveScheduler | None:
        return self._scheduler

    def _set_context(self, context: TrackingContext) -> None:
        self._context = context
        if self._scheduler is not None:
            self._scheduler.update_context(context)

    def use_default_location(self) -> None:
        self._set_context(replace(self._context, observer=DEFAULT_OBSERVER))

    def use_location(self, observer: ObserverLocation) -> None:
        """Use an observer obtained elsewhere, e.g. from device geolocation."""
        self._set_context(replace(self._context, observer=observer))

    def use_manual_location(self, latitude: float, longitude: float, altitude_m: float) -> None:
        """Use a manually entered site (altitude in metres).

        Raises:
            ValueError: If latitude or longitude is out of range.
        """
        self.use_location(ObserverLocation.manual(latitude, longitude, altitude_m))

    def use_fixed_time(self, when: datetime) -> None:
        """Pin computations to ``when``; pauses live updates."""
        self._set_context(replace(self._context, time=TimeSelector.at(when)))

    def use_live_time(self) -> None:
        self._set_context(replace(self._context, time=LIVE))

    def submit(self, text: str, now: datetime | None = None) -> Submission:
        """Parse, propagate and transform ``text`` for the current context.

        Any previous scheduler is torn down first. On success a new scheduler
        is created (paused) and seeded with the result; call
        ``session.scheduler.start()`` from an event loop to go live.

        Returns:
            A Submission holding either the result or the error.
        """
        self.close()
        if now is None and self._clock is not None:
            now = self._clock()
        try:
            tracker = Tracker.from_text(text)
            result = tracker.compute(self._context.observer, self._context.time.resolve(now))
        except TrackingError as e:
            logger.warning("Submission failed (%s): %s", e.kind, e)
            return Submission(error=e)

        kwargs = {"clock": self._clock} if self._clock is not None else {}
        self._scheduler = LiveScheduler(tracker.compute, self._context, interval=self._interval, **kwargs)
        self._scheduler.latest = result
        logger.debug("Tracking %s (NORAD %d)", tracker.name, tracker.elements.norad_id)
        return Submission(result=result, tracker=tracker)

    def close(self) -> None:
        """Stop live updates and forget the tracked satellite."""
        if self._scheduler is not None:
            self._scheduler.close()
            self._scheduler = None
