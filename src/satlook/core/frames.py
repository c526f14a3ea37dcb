"""Observer and geodetic quantities for a propagated satellite.

Earth-fixed coordinates, the sub-satellite point and look angles come from
skyfield, which evaluates the same sgp4 record and handles the TEME to ITRS
rotation and the WGS-84 ellipsoid. Right ascension and declination are read
straight off the inertial (TEME) position vector.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

import numpy as np
from numpy.typing import NDArray
from sgp4.api import Satrec
from skyfield.api import EarthSatellite, load, wgs84
from skyfield.framelib import itrs
from skyfield.positionlib import Geocentric
from skyfield.timelib import Time
from skyfield.toposlib import GeographicPosition

from satlook.core.errors import TransformFailure
from satlook.core.observer import ObserverLocation

logger = logging.getLogger(__name__)

ts = load.timescale()

Vector = Sequence[float] | NDArray[np.float64]


@dataclass(frozen=True)
class GeodeticPosition:
    """Sub-satellite point.

    Attributes:
        latitude: Geodetic latitude in degrees.
        longitude: Longitude in degrees, [-180, 180].
        height: Height above the ellipsoid in km.
    """

    latitude: float
    longitude: float
    height: float


@dataclass(frozen=True)
class LookAngles:
    """Topocentric direction to a target, in degrees and km."""

    azimuth: float
    elevation: float
    range_km: float


@dataclass(frozen=True)
class PositionResult:
    """Everything computed for one satellite at one instant.

    Attributes:
        azimuth: Azimuth from the observer in degrees, [0, 360).
        elevation: Elevation above the observer's horizon in degrees.
        range_km: Slant range from the observer in km.
        right_ascension: Geocentric right ascension in degrees, [0, 360).
        declination: Geocentric declination in degrees, [-90, 90].
        geodetic: Sub-satellite point.
        position_ecf: Earth-fixed position [x, y, z] in km.
        timestamp: Instant the position was computed for.
    """

    azimuth: float
    elevation: float
    range_km: float
    right_ascension: float
    declination: float
    geodetic: GeodeticPosition
    position_ecf: tuple[float, float, float]
    timestamp: datetime

    def as_dict(self) -> dict:
        """Result record in the shape handed to renderers."""
        return {
            "azimuth": self.azimuth,
            "elevation": self.elevation,
            "range": self.range_km,
            "rightAscension": self.right_ascension,
            "declination": self.declination,
            "positionGeodetic": {
                "latitude": self.geodetic.latitude,
                "longitude": self.geodetic.longitude,
                "height": self.geodetic.height,
            },
        }


def skyfield_time(when: datetime) -> Time:
    """Skyfield time for ``when`` (naive datetimes are taken as UTC)."""
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return ts.from_datetime(when)


def earth_satellite(satrec: Satrec, name: str | None = None) -> EarthSatellite:
    """Wrap an initialized sgp4 record for skyfield frame conversions."""
    satellite = EarthSatellite.from_satrec(satrec, ts)
    satellite.name = name
    return satellite


def observer_site(observer: ObserverLocation) -> GeographicPosition:
    """The observer as a point on the WGS-84 ellipsoid."""
    return wgs84.latlon(observer.latitude, observer.longitude, elevation_m=observer.height * 1000.0)


def earth_fixed_position(geocentric: Geocentric) -> NDArray[np.float64]:
    """[x, y, z] Earth-fixed (ITRS) position in km."""
    return np.asarray(geocentric.frame_xyz(itrs).km, dtype=np.float64)


def sub_satellite_point(geocentric: Geocentric) -> GeodeticPosition:
    """Geodetic latitude, longitude and height of a geocentric position."""
    point = wgs84.geographic_position_of(geocentric)
    return GeodeticPosition(
        latitude=float(point.latitude.degrees),
        longitude=float(point.longitude.degrees),
        height=float(point.elevation.km),
    )


def look_angles(satellite: EarthSatellite, observer: ObserverLocation, t: Time) -> LookAngles:
    """Azimuth and elevation (degrees) and slant range (km) from an observer.

    Raises:
        TransformFailure: If the target coincides with the observer.
    """
    elevation, azimuth, distance = (satellite - observer_site(observer)).at(t).altaz()
    range_km = float(distance.km)
    if range_km == 0.0:
        raise TransformFailure("Target coincides with the observer")
    return LookAngles(azimuth=float(azimuth.degrees), elevation=float(elevation.degrees), range_km=range_km)


def right_ascension(position_eci: Vector) -> float:
    """Right ascension of an inertial position in degrees, [0, 360)."""
    x, y, _ = (float(c) for c in position_eci)
    ra = math.degrees(math.atan2(y, x))
    if ra < 0:
        ra += 360.0
    # -tiny + 360 rounds to exactly 360
    return 0.0 if ra >= 360.0 else ra


def declination(position_eci: Vector) -> float:
    """Declination of an inertial position in degrees, [-90, 90].

    Raises:
        TransformFailure: For the zero vector.
    """
    x, y, z = (float(c) for c in position_eci)
    norm = math.sqrt(x * x + y * y + z * z)
    if norm == 0.0:
        raise TransformFailure("Declination undefined for a zero position vector")
    return math.degrees(math.asin(max(-1.0, min(1.0, z / norm))))


def transform(
    position_eci: Vector,
    when: datetime,
    observer: ObserverLocation,
    satellite: EarthSatellite,
) -> PositionResult:
    """Convert a propagated position into observer and geodetic quantities.

    Args:
        position_eci: [x, y, z] inertial (TEME) position in km at ``when``.
        when: Instant of the position.
        observer: Ground observer for look angles.
        satellite: The same sgp4 record wrapped by :func:`earth_satellite`.

    Returns:
        A PositionResult with angles in degrees.

    Raises:
        TransformFailure: If the input or any output coordinate is non-finite.
    """
    r = np.asarray(position_eci, dtype=np.float64)
    if r.shape != (3,) or not np.all(np.isfinite(r)):
        logger.warning("Refusing to transform invalid position %r", position_eci)
        raise TransformFailure("Propagation failed - invalid position returned")

    t = skyfield_time(when)
    geocentric = satellite.at(t)
    position_ecf = earth_fixed_position(geocentric)
    look = look_angles(satellite, observer, t)

    result = PositionResult(
        azimuth=look.azimuth % 360.0,
        elevation=look.elevation,
        range_km=look.range_km,
        right_ascension=right_ascension(r),
        declination=declination(r),
        geodetic=sub_satellite_point(geocentric),
        position_ecf=(float(position_ecf[0]), float(position_ecf[1]), float(position_ecf[2])),
        timestamp=when,
    )

    values = (
        result.azimuth,
        result.elevation,
        result.range_km,
        result.right_ascension,
        result.declination,
        result.geodetic.latitude,
        result.geodetic.longitude,
        result.geodetic.height,
        *result.position_ecf,
    )
    if not all(math.isfinite(v) for v in values):
        logger.warning("Transform produced non-finite coordinates at %s", when)
        raise TransformFailure("Coordinate transform produced non-finite values")

    return result
