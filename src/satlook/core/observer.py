"""Observer location and time selection.

Both are immutable values bundled in a :class:`TrackingContext`. User
actions replace the context as a whole instead of editing fields, so a
recompute always sees a consistent observer/time pair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from satlook.utils.constants import (
    DEFAULT_OBSERVER_HEIGHT_KM,
    DEFAULT_OBSERVER_LATITUDE_DEG,
    DEFAULT_OBSERVER_LONGITUDE_DEG,
    DEFAULT_OBSERVER_NAME,
)


@dataclass(frozen=True)
class ObserverLocation:
    """A ground observer.

    Attributes:
        latitude: Geodetic latitude in degrees, [-90, 90].
        longitude: Geodetic longitude in degrees, [-180, 180].
        height: Height above sea level in km.
        name: Optional site name.
    """

    latitude: float
    longitude: float
    height: float
    name: str | None = None

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError("Latitude must be between -90 and 90 degrees")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError("Longitude must be between -180 and 180 degrees")

    @classmethod
    def manual(cls, latitude: float, longitude: float, altitude_m: float, name: str | None = None) -> ObserverLocation:
        """Build a location from manual entry, with altitude in metres."""
        return cls(latitude=latitude, longitude=longitude, height=altitude_m / 1000.0, name=name)

    def describe(self) -> str:
        """One-line description, e.g. ``Site (33.8700°S, 151.2100°E, 58m)``."""
        ns = "S" if self.latitude < 0 else "N"
        ew = "W" if self.longitude < 0 else "E"
        return (
            f"{self.name or 'Custom Location'} "
            f"({abs(self.latitude):.4f}°{ns}, {abs(self.longitude):.4f}°{ew}, {round(self.height * 1000)}m)"
        )


DEFAULT_OBSERVER = ObserverLocation(
    latitude=DEFAULT_OBSERVER_LATITUDE_DEG,
    longitude=DEFAULT_OBSERVER_LONGITUDE_DEG,
    height=DEFAULT_OBSERVER_HEIGHT_KM,
    name=DEFAULT_OBSERVER_NAME,
)


@dataclass(frozen=True)
class TimeSelector:
    """Live wall-clock time, or a pinned instant.

    Attributes:
        fixed: The pinned UTC instant, or None for live time.
    """

    fixed: datetime | None = None

    @classmethod
    def at(cls, t: datetime) -> TimeSelector:
        """Pin the selector to ``t`` (naive datetimes are taken as UTC)."""
        if t.tzinfo is None:
            t = t.replace(tzinfo=timezone.utc)
        return cls(fixed=t.astimezone(timezone.utc))

    @classmethod
    def from_date_time(cls, date_text: str, time_text: str) -> TimeSelector:
        """Pin the selector from separate UTC date and time fields.

        Args:
            date_text: Date as ``YYYY-MM-DD``.
            time_text: Time as ``HH:MM`` (seconds optional).

        Raises:
            ValueError: If either field is empty or the combination is invalid.
        """
        if not date_text or not time_text:
            raise ValueError("Please select both date and time")
        try:
            t = datetime.fromisoformat(f"{date_text.strip()}T{time_text.strip()}")
        except ValueError as e:
            raise ValueError("Invalid date or time format") from e
        return cls.at(t.replace(tzinfo=timezone.utc))

    @property
    def is_live(self) -> bool:
        return self.fixed is None

    def resolve(self, now: datetime | None = None) -> datetime:
        """Instant to propagate to: the pinned time, else ``now`` (default: current UTC)."""
        if self.fixed is not None:
            return self.fixed
        return now if now is not None else datetime.now(timezone.utc)


LIVE = TimeSelector()


@dataclass(frozen=True)
class TrackingContext:
    """Observer and time selection used for every recompute."""

    observer: ObserverLocation = DEFAULT_OBSERVER
    time: TimeSelector = field(default=LIVE)
