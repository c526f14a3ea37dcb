from __future__ import annotations

"""Constants and defaults for element parsing, propagation and live tracking.

Distances in km and angles in degrees unless otherwise noted.
"""

# --- SGP4 time reference ---
SGP4_EPOCH_JD: float = 2433281.5
"""Julian date of 1949-12-31 00:00 UT, the zero point of ``sgp4init`` epochs."""

MINUTES_PER_DAY: float = 1440.0
"""Minutes in one day; mean motion conversions go through rad/min."""

MAX_CATALOG_NUMBER: int = 339999
"""Largest catalog number sgp4 accepts (Alpha-5 "Z9999")."""

# --- Input formats ---
TLE_MIN_LINE_LENGTH: int = 68
"""Shortest accepted TLE line (the trailing checksum column may be missing)."""

DEFAULT_SATELLITE_NAME: str = "Satellite"
"""Display name used when the input carries no usable name."""

# --- Observer defaults ---
DEFAULT_OBSERVER_NAME: str = "Mt Abu Observatory Gurushikhar"
"""Name of the default observing site."""

DEFAULT_OBSERVER_LATITUDE_DEG: float = 24.625
"""Geodetic latitude of the default observing site in degrees."""

DEFAULT_OBSERVER_LONGITUDE_DEG: float = 72.715
"""Geodetic longitude of the default observing site in degrees."""

DEFAULT_OBSERVER_HEIGHT_KM: float = 1.68
"""Height of the default observing site above sea level in km."""

# --- Live updates ---
DEFAULT_UPDATE_INTERVAL_S: float = 2.0
"""Seconds between live position recomputations."""
