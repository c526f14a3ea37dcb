"""Sexagesimal display helpers for right ascension and declination."""

from __future__ import annotations

import math


def ra_to_hms(ra_deg: float) -> tuple[int, int, float]:
    """Split a right ascension in degrees into (hours, minutes, seconds).

    One hour of right ascension is 15 degrees. Hours wrap at 24.
    """
    total_hours = ra_deg / 15.0
    hours = math.floor(total_hours)
    minutes_decimal = (total_hours - hours) * 60.0
    minutes = math.floor(minutes_decimal)
    seconds = (minutes_decimal - minutes) * 60.0
    return hours % 24, minutes, seconds


def dec_to_dms(dec_deg: float) -> tuple[int, int, int, float]:
    """Split a declination into (sign, degrees, arcminutes, arcseconds).

    ``sign`` is -1 south of the equator and 1 otherwise; the other
    components are unsigned, so declinations between -1 and 0 degrees keep
    their sign.
    """
    negative = dec_deg < 0
    absolute = abs(dec_deg)
    degrees = math.floor(absolute)
    minutes_decimal = (absolute - degrees) * 60.0
    minutes = math.floor(minutes_decimal)
    seconds = (minutes_decimal - minutes) * 60.0
    return (-1 if negative else 1), degrees, minutes, seconds


def format_ra(ra_deg: float) -> str:
    """e.g. ``05h 30m 00.00s``."""
    hours, minutes, seconds = ra_to_hms(ra_deg)
    return f"{hours:02d}h {minutes:02d}m {seconds:05.2f}s"


def format_dec(dec_deg: float) -> str:
    """e.g. ``-0° 30' 0.00"``."""
    sign, degrees, minutes, seconds = dec_to_dms(dec_deg)
    return f"{'-' if sign < 0 else ''}{degrees}° {minutes}' {seconds:.2f}\""
