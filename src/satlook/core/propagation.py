"""Orbital propagation via SGP4.

The sgp4 library is the propagation authority: elements are loaded with
``Satrec.sgp4init`` and positions come back in the TEME frame, which this
package treats as Earth-centered inertial.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone

import numpy as np
from numpy.typing import NDArray
from sgp4.api import Satrec, WGS72, jday
from sgp4.propagation import gstime

from satlook.core.elements import CanonicalElements
from satlook.core.errors import PropagationError, TransformFailure
from satlook.utils.constants import MINUTES_PER_DAY, SGP4_EPOCH_JD

logger = logging.getLogger(__name__)

SGP4_ERROR_MESSAGES: dict[int, str] = {
    1: "Mean elements, ecc >= 1.0 or ecc < -0.001 or a < 0.95 er",
    2: "Mean motion less than 0.0",
    3: "Pert elements, ecc < 0.0 or ecc > 1.0",
    4: "Semi-latus rectum < 0.0",
    5: "Epoch elements are sub-orbital",
    6: "Satellite has decayed",
}
"""Human-readable messages for SGP4 error codes."""

# rev/day -> rad/min
_REV_PER_DAY_TO_RAD_PER_MIN = 2.0 * math.pi / MINUTES_PER_DAY


@dataclass
class StateVector:
    """Position and velocity in TEME frame.

    Attributes:
        position_km: [x, y, z] position in km.
        velocity_km_s: [vx, vy, vz] velocity in km/s.
        epoch: Time of this state vector.
    """

    position_km: NDArray[np.float64]  # shape (3,)
    velocity_km_s: NDArray[np.float64]  # shape (3,)
    epoch: datetime


def describe_error(code: int) -> str:
    """Return the message for an SGP4 error code."""
    return SGP4_ERROR_MESSAGES.get(code, f"Unknown error code: {code}")


def julian_date(t: datetime) -> tuple[float, float]:
    """Split a datetime into the (jd, fraction) pair sgp4 expects.

    Naive datetimes are taken as UTC.
    """
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    t = t.astimezone(timezone.utc)
    return jday(t.year, t.month, t.day, t.hour, t.minute, t.second + t.microsecond / 1e6)


def sidereal_time(t: datetime) -> float:
    """Greenwich mean sidereal time at ``t``, in radians [0, 2pi)."""
    jd, fr = julian_date(t)
    return gstime(jd + fr)


def initialize(elements: CanonicalElements) -> Satrec:
    """Load canonical elements into an SGP4 satellite record.

    Args:
        elements: Canonical elements to propagate.

    Returns:
        An initialized sgp4 Satrec.

    Raises:
        PropagationError: If SGP4 initialization reports an error code.
    """
    jd, fr = julian_date(elements.epoch)
    epoch_days = (jd - SGP4_EPOCH_JD) + fr

    sat = Satrec()
    sat.sgp4init(
        WGS72,
        "i",
        elements.norad_id,
        epoch_days,
        elements.bstar,
        elements.mean_motion_dot * _REV_PER_DAY_TO_RAD_PER_MIN / MINUTES_PER_DAY,
        elements.mean_motion_ddot * _REV_PER_DAY_TO_RAD_PER_MIN / MINUTES_PER_DAY ** 2,
        elements.eccentricity,
        math.radians(elements.arg_perigee_deg),
        math.radians(elements.inclination_deg),
        math.radians(elements.mean_anomaly_deg),
        elements.mean_motion_rev_per_day * _REV_PER_DAY_TO_RAD_PER_MIN,
        math.radians(elements.raan_deg),
    )

    if sat.error != 0:
        message = describe_error(sat.error)
        logger.error("SGP4 initialization failed for NORAD %d: %s", elements.norad_id, message)
        raise PropagationError(sat.error, message)

    logger.debug("Initialized SGP4 record for NORAD %d", elements.norad_id)
    return sat


def propagate(satrec: Satrec, t: datetime) -> StateVector:
    """Propagate an initialized record to a single time.

    Args:
        satrec: Record returned by :func:`initialize`.
        t: UTC datetime to propagate to.

    Returns:
        The TEME state vector at ``t``.

    Raises:
        PropagationError: If SGP4 propagation fails (error code != 0).
        TransformFailure: If SGP4 returns a non-finite state.
    """
    jd, fr = julian_date(t)
    error_code, pos, vel = satrec.sgp4(jd, fr)

    if error_code != 0:
        message = describe_error(error_code)
        logger.warning("SGP4 propagation failed for NORAD %s at %s: %s", satrec.satnum, t, message)
        raise PropagationError(error_code, message)

    position = np.array(pos, dtype=np.float64)
    if not np.all(np.isfinite(position)):
        logger.warning("SGP4 returned a non-finite position for NORAD %s at %s", satrec.satnum, t)
        raise TransformFailure("Propagation failed - invalid position returned")

    return StateVector(
        position_km=position,
        velocity_km_s=np.array(vel, dtype=np.float64),
        epoch=t,
    )
