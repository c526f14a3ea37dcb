"""Canonical orbital elements built from TLE or OMM input.

Whatever the wire format, the propagator only ever sees a
:class:`CanonicalElements` record. TLE columns are decoded with the sgp4
library's two-line reader; OMM fields are converted from the decoded record.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from sgp4.api import Satrec, WGS72

from satlook.core.errors import InvalidOmmError, InvalidTleError, UnrecognizedFormatError
from satlook.core.formats import Detection, InputFormat, TleLinePair
from satlook.core.kvn import decode_kvn, parse_epoch
from satlook.core.validation import validate_omm, validate_tle
from satlook.utils.constants import DEFAULT_SATELLITE_NAME, MAX_CATALOG_NUMBER, MINUTES_PER_DAY

logger = logging.getLogger(__name__)

# rad/min -> rev/day
_RAD_PER_MIN_TO_REV_PER_DAY = MINUTES_PER_DAY / (2.0 * math.pi)


class ElementSource(Enum):
    """Input format a set of canonical elements was built from."""

    TLE = "TLE"
    OMM_JSON = "OMM_JSON"
    OMM_KVN = "OMM_KVN"


@dataclass(frozen=True)
class CanonicalElements:
    """Mean orbital elements in the form handed to the propagator.

    Attributes:
        name: Satellite display name.
        norad_id: NORAD catalog number.
        epoch: Element epoch as a UTC datetime.
        mean_motion_rev_per_day: Mean motion in revolutions per day.
        eccentricity: Orbital eccentricity (dimensionless).
        inclination_deg: Orbital inclination in degrees.
        raan_deg: Right ascension of ascending node in degrees.
        arg_perigee_deg: Argument of perigee in degrees.
        mean_anomaly_deg: Mean anomaly in degrees.
        bstar: BSTAR drag term (1/earth radii).
        mean_motion_dot: First derivative of mean motion / 2 (rev/day^2).
        mean_motion_ddot: Second derivative of mean motion / 6 (rev/day^3).
        classification: Security classification (U, C or S).
        international_designator: COSPAR designator, e.g. ``1998-067A``.
        element_set_no: Element set number.
        rev_at_epoch: Revolution number at epoch.
        ephemeris_type: Ephemeris type (0 for SGP4).
        source: Format these elements were read from. Display only.
    """

    name: str
    norad_id: int
    epoch: datetime
    mean_motion_rev_per_day: float
    eccentricity: float
    inclination_deg: float
    raan_deg: float
    arg_perigee_deg: float
    mean_anomaly_deg: float
    bstar: float
    mean_motion_dot: float
    mean_motion_ddot: float
    source: ElementSource
    classification: str = "U"
    international_designator: str = ""
    element_set_no: int = 0
    rev_at_epoch: int = 0
    ephemeris_type: int = 0

    @property
    def period_minutes(self) -> float:
        """Orbital period in minutes."""
        return MINUTES_PER_DAY / self.mean_motion_rev_per_day


def tle_display_name(line1: str) -> str:
    """Display name for a TLE: columns 9-32 of line 1, trimmed."""
    return line1[9:32].strip() or DEFAULT_SATELLITE_NAME


def from_tle(pair: TleLinePair) -> CanonicalElements:
    """Build canonical elements from a validated TLE line pair.

    Args:
        pair: The two TLE lines.

    Returns:
        Canonical elements with ``source`` set to ``ElementSource.TLE``.

    Raises:
        InvalidTleError: If the sgp4 reader cannot decode the columns.
    """
    line1 = pair.line1.strip()
    line2 = pair.line2.strip()
    try:
        sat = Satrec.twoline2rv(line1, line2, WGS72)
    except ValueError as e:
        logger.error("Could not decode TLE columns: %s", e)
        raise InvalidTleError([str(e)]) from e

    year = sat.epochyr
    year = year + 2000 if year < 57 else year + 1900
    epoch = datetime(year, 1, 1, tzinfo=timezone.utc) + timedelta(days=sat.epochdays - 1)

    # ndot/nddot come back in rad/min^2 and rad/min^3
    elements = CanonicalElements(
        name=tle_display_name(pair.line1),
        norad_id=int(sat.satnum),
        epoch=epoch,
        mean_motion_rev_per_day=sat.no_kozai * _RAD_PER_MIN_TO_REV_PER_DAY,
        eccentricity=sat.ecco,
        inclination_deg=math.degrees(sat.inclo),
        raan_deg=math.degrees(sat.nodeo),
        arg_perigee_deg=math.degrees(sat.argpo),
        mean_anomaly_deg=math.degrees(sat.mo),
        bstar=sat.bstar,
        mean_motion_dot=sat.ndot * MINUTES_PER_DAY * _RAD_PER_MIN_TO_REV_PER_DAY,
        mean_motion_ddot=sat.nddot * MINUTES_PER_DAY ** 2 * _RAD_PER_MIN_TO_REV_PER_DAY,
        source=ElementSource.TLE,
        classification=getattr(sat, "classification", "U") or "U",
        international_designator=(getattr(sat, "intldesg", "") or "").strip(),
        element_set_no=int(getattr(sat, "elnum", 0) or 0),
        rev_at_epoch=int(getattr(sat, "revnum", 0) or 0),
        ephemeris_type=int(getattr(sat, "ephtype", 0) or 0),
    )
    logger.debug("Built elements for NORAD %d from TLE (epoch %s)", elements.norad_id, epoch.isoformat())
    return elements


def _float_field(record: Mapping, key: str, default: float | None = None) -> float:
    value = record.get(key)
    if value is None:
        if default is None:
            raise InvalidOmmError([f"missing required field: {key}"])
        return default
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidOmmError([f"{key} is not a number: {value!r}"]) from e


def _int_field(record: Mapping, key: str, default: int = 0) -> int:
    value = record.get(key)
    if value is None:
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError) as e:
        raise InvalidOmmError([f"{key} is not an integer: {value!r}"]) from e


def from_omm(record: Mapping, source: ElementSource = ElementSource.OMM_JSON) -> CanonicalElements:
    """Build canonical elements from a validated OMM record.

    Args:
        record: OMM mapping, as decoded from JSON or KVN.
        source: Which OMM serialization the record came from.

    Returns:
        Canonical elements. Missing drag terms default to zero.

    Raises:
        InvalidOmmError: If NORAD_CAT_ID is not an integer in the range sgp4
            accepts, or a field cannot be converted.
    """
    norad = record.get("NORAD_CAT_ID")
    try:
        norad_value = float(norad)
    except (TypeError, ValueError) as e:
        raise InvalidOmmError([f"NORAD_CAT_ID is not a catalog number: {norad!r}"]) from e
    if not norad_value.is_integer() or norad_value < 0:
        raise InvalidOmmError([f"NORAD_CAT_ID is not a catalog number: {norad!r}"])
    if norad_value > MAX_CATALOG_NUMBER:
        logger.error("NORAD_CAT_ID %d cannot be propagated", int(norad_value))
        raise InvalidOmmError([f"NORAD_CAT_ID {int(norad_value)} exceeds {MAX_CATALOG_NUMBER}"])

    epoch = parse_epoch(record.get("EPOCH"))
    if epoch is None:
        raise InvalidOmmError([f"EPOCH is not a valid timestamp: {record.get('EPOCH')!r}"])

    name = record.get("OBJECT_NAME")
    elements = CanonicalElements(
        name=str(name) if name not in (None, "") else DEFAULT_SATELLITE_NAME,
        norad_id=int(norad_value),
        epoch=epoch,
        mean_motion_rev_per_day=_float_field(record, "MEAN_MOTION"),
        eccentricity=_float_field(record, "ECCENTRICITY"),
        inclination_deg=_float_field(record, "INCLINATION"),
        raan_deg=_float_field(record, "RA_OF_ASC_NODE"),
        arg_perigee_deg=_float_field(record, "ARG_OF_PERICENTER"),
        mean_anomaly_deg=_float_field(record, "MEAN_ANOMALY"),
        bstar=_float_field(record, "BSTAR", 0.0),
        mean_motion_dot=_float_field(record, "MEAN_MOTION_DOT", 0.0),
        mean_motion_ddot=_float_field(record, "MEAN_MOTION_DDOT", 0.0),
        source=source,
        classification=str(record.get("CLASSIFICATION_TYPE") or "U"),
        international_designator=str(record.get("OBJECT_ID") or ""),
        element_set_no=_int_field(record, "ELEMENT_SET_NO"),
        rev_at_epoch=_int_field(record, "REV_AT_EPOCH"),
        ephemeris_type=_int_field(record, "EPHEMERIS_TYPE"),
    )
    logger.debug("Built elements for NORAD %d from %s", elements.norad_id, source.value)
    return elements


def _load_omm_json(text: str) -> object:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("OMM JSON could not be decoded: %s", e)
        raise InvalidOmmError([f"invalid JSON: {e}"]) from e

    # CelesTrak GP queries return a list of records; track the first one.
    if isinstance(data, list):
        if not data:
            raise InvalidOmmError(["JSON array contains no OMM records"])
        data = data[0]
    return data


def build_elements(detection: Detection) -> CanonicalElements:
    """Decode, validate and normalize detected input.

    Args:
        detection: Output of :func:`satlook.core.formats.detect_format`.

    Returns:
        Canonical elements ready for propagation.

    Raises:
        UnrecognizedFormatError: If the input format was not recognized.
        InvalidTleError: If the TLE pair fails validation.
        InvalidOmmError: If the OMM record fails decoding or validation.
    """
    if detection.format is InputFormat.TLE and detection.tle is not None:
        pair = detection.tle
        verdict = validate_tle(pair.line1, pair.line2)
        if not verdict:
            logger.error("Invalid TLE: %s", "; ".join(verdict.reasons))
            raise InvalidTleError(verdict.reasons)
        return from_tle(pair)

    if detection.format is InputFormat.OMM_KVN:
        record: object = decode_kvn(detection.text)
        source = ElementSource.OMM_KVN
    elif detection.format is InputFormat.OMM_JSON:
        record = _load_omm_json(detection.text)
        source = ElementSource.OMM_JSON
    else:
        raise UnrecognizedFormatError()

    verdict = validate_omm(record)
    if not verdict:
        logger.error("Invalid OMM: %s", "; ".join(verdict.reasons))
        raise InvalidOmmError(verdict.reasons)
    for warning in verdict.warnings:
        logger.warning("OMM: %s", warning)

    return from_omm(record, source)
