"""Cheap structural validation of TLE line pairs and OMM records.

These checks only discriminate well-formed input from obvious garbage.
Deeper structural problems (checksums, column layout, physically impossible
orbits) are left to the SGP4 propagator, which reports them as error codes.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass

from satlook.core.kvn import parse_epoch
from satlook.utils.constants import TLE_MIN_LINE_LENGTH

logger = logging.getLogger(__name__)

_CATALOG_RE = re.compile(r"^[12] (\d{4,5})")

REQUIRED_OMM_FIELDS: tuple[str, ...] = (
    "OBJECT_NAME",
    "NORAD_CAT_ID",
    "EPOCH",
    "MEAN_MOTION",
    "ECCENTRICITY",
    "INCLINATION",
    "RA_OF_ASC_NODE",
    "ARG_OF_PERICENTER",
    "MEAN_ANOMALY",
)

NUMERIC_OMM_FIELDS: tuple[str, ...] = (
    "MEAN_MOTION",
    "ECCENTRICITY",
    "INCLINATION",
    "RA_OF_ASC_NODE",
    "ARG_OF_PERICENTER",
    "MEAN_ANOMALY",
)


@dataclass(frozen=True)
class Verdict:
    """Result of a validation check.

    Attributes:
        valid: Whether the input was accepted.
        reasons: Why the input was rejected (empty when valid).
        warnings: Non-fatal observations about accepted input.
    """

    valid: bool
    reasons: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.valid


def catalog_number(line: str) -> str | None:
    """Extract the 4-5 digit catalog number following a TLE line marker."""
    match = _CATALOG_RE.match(line.strip())
    return match.group(1) if match else None


def validate_tle(line1: str, line2: str) -> Verdict:
    """Validate a TLE line pair.

    A pair is accepted iff both lines have at least 68 characters, line 1
    starts with ``"1 "``, line 2 starts with ``"2 "``, and the catalog
    numbers on both lines match.

    Args:
        line1: TLE line 1.
        line2: TLE line 2.

    Returns:
        A Verdict listing every failed check.
    """
    reasons: list[str] = []

    if len(line1) < TLE_MIN_LINE_LENGTH:
        reasons.append(f"line 1 has {len(line1)} characters, expected at least {TLE_MIN_LINE_LENGTH}")
    if len(line2) < TLE_MIN_LINE_LENGTH:
        reasons.append(f"line 2 has {len(line2)} characters, expected at least {TLE_MIN_LINE_LENGTH}")

    if not line1.strip().startswith("1 "):
        reasons.append('line 1 must start with "1 "')
    if not line2.strip().startswith("2 "):
        reasons.append('line 2 must start with "2 "')

    if not reasons:
        sat1 = catalog_number(line1)
        sat2 = catalog_number(line2)
        if sat1 is None or sat2 is None:
            reasons.append("catalog number not found")
        elif sat1 != sat2:
            reasons.append(f"catalog numbers differ ({sat1} != {sat2})")

    if reasons:
        logger.debug("TLE rejected: %s", "; ".join(reasons))
    return Verdict(not reasons, tuple(reasons))


def _finite_number(value: object) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def validate_omm(record: object) -> Verdict:
    """Validate an OMM record decoded from JSON or KVN.

    Rejects missing required fields, a NORAD_CAT_ID that is neither a number
    nor a string, an EPOCH that is not a parsable timestamp string, non-finite
    orbital elements, and eccentricity outside [0, 1).

    Args:
        record: Decoded OMM mapping.

    Returns:
        A Verdict listing every failed check.
    """
    if not isinstance(record, Mapping):
        return Verdict(False, (f"expected an OMM object, got {type(record).__name__}",))

    reasons: list[str] = []
    warnings: list[str] = []

    missing = [name for name in REQUIRED_OMM_FIELDS if name not in record]
    if missing:
        reasons.append(f"missing required field(s): {', '.join(missing)}")

    if "NORAD_CAT_ID" in record:
        norad = record["NORAD_CAT_ID"]
        if isinstance(norad, bool) or not isinstance(norad, (int, float, str)):
            reasons.append(f"NORAD_CAT_ID has invalid type: {type(norad).__name__}")

    if "EPOCH" in record:
        epoch = record["EPOCH"]
        if not isinstance(epoch, str):
            reasons.append(f"EPOCH has invalid type: {type(epoch).__name__}")
        elif parse_epoch(epoch) is None:
            reasons.append(f"EPOCH is not a valid timestamp: {epoch!r}")

    bad = [name for name in NUMERIC_OMM_FIELDS if name in record and not _finite_number(record[name])]
    if bad:
        reasons.append(f"not a finite number: {', '.join(bad)}")
    elif "ECCENTRICITY" in record:
        ecc = float(record["ECCENTRICITY"])
        if not 0.0 <= ecc < 1.0:
            reasons.append(f"ECCENTRICITY {ecc} outside [0, 1)")

    if "OBJECT_NAME" in record and not record["OBJECT_NAME"]:
        warnings.append("OBJECT_NAME is empty")

    if reasons:
        logger.debug("OMM rejected: %s", "; ".join(reasons))
    return Verdict(not reasons, tuple(reasons), tuple(warnings))
