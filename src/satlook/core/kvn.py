"""OMM Key-Value Notation (KVN) decoding.

KVN is the line-oriented ``KEY = value`` serialization of a CCSDS Orbit
Mean-Elements Message (CCSDS 502.0-B). Values arrive untyped, so decoding
applies a fixed coercion policy:

1. ``true`` / ``false`` / ``null`` become booleans or ``None``.
2. ``EPOCH`` stays a string (quotes stripped). An unparsable epoch is kept
   but flagged; rejecting it is the validator's job.
3. Keys known to be numeric are parsed as floats, falling back to a string.
4. Anything else becomes a number if it looks like one, otherwise a string.

Lines that are not ``KEY = value`` pairs (COMMENT lines, blank lines) are
skipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"^([A-Z_][A-Z0-9_]*)\s*=\s*(.*?)\s*$")
_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_LEADING_NUMBER_RE = re.compile(rf"^\s*({_NUMBER})")
_FULL_NUMBER_RE = re.compile(rf"^\s*{_NUMBER}\s*$")
_DAY_OF_YEAR_RE = re.compile(
    r"^(\d{4})-(\d{3})(?:T(\d{2}):(\d{2})(?::(\d{2}(?:\.\d*)?))?)?Z?$"
)
_FRACTION_RE = re.compile(r"\.(\d+)")

NUMERIC_FIELDS: frozenset[str] = frozenset({
    "NORAD_CAT_ID",
    "MEAN_MOTION",
    "ECCENTRICITY",
    "INCLINATION",
    "RA_OF_ASC_NODE",
    "ARG_OF_PERICENTER",
    "MEAN_ANOMALY",
    "ELEMENT_SET_NO",
    "REV_AT_EPOCH",
    "BSTAR",
    "MEAN_MOTION_DOT",
    "MEAN_MOTION_DDOT",
    "EPHEMERIS_TYPE",
})
"""OMM keys whose values are always coerced to floating point."""


class ValueKind(Enum):
    """Type tag of a decoded KVN value."""

    NUMBER = "number"
    STRING = "string"
    BOOL = "bool"
    NULL = "null"


@dataclass(frozen=True)
class KvnField:
    """One decoded ``KEY = value`` line.

    Attributes:
        key: Upper-case field name.
        kind: Type tag of ``value``.
        value: Decoded value (``bool``, ``None``, ``int``, ``float`` or ``str``).
        raw_text: Right-hand side of the line as written.
        flagged: True when the value could not be coerced as its key requires
            (an unparsable EPOCH or a non-numeric value for a numeric key).
    """

    key: str
    kind: ValueKind
    value: bool | int | float | str | None
    raw_text: str
    flagged: bool = False


def parse_epoch(text: object) -> datetime | None:
    """Parse an OMM epoch into a timezone-aware UTC datetime.

    Accepts ISO 8601 calendar timestamps (``2023-03-26T05:19:34.116960``,
    optionally suffixed with ``Z`` or an offset) and the CCSDS day-of-year
    form (``2023-085T12:00:00.000``). Naive timestamps are taken as UTC.

    Returns:
        The parsed datetime, or None if the text is not a valid timestamp.
    """
    if not isinstance(text, str):
        return None
    value = text.strip()
    if not value:
        return None

    match = _DAY_OF_YEAR_RE.match(value)
    if match:
        year, day = int(match.group(1)), int(match.group(2))
        start = datetime(year, 1, 1, tzinfo=timezone.utc)
        days_in_year = (datetime(year + 1, 1, 1, tzinfo=timezone.utc) - start).days
        if not 1 <= day <= days_in_year:
            return None
        hour = int(match.group(3) or 0)
        minute = int(match.group(4) or 0)
        second = float(match.group(5) or 0.0)
        if hour > 23 or minute > 59 or second >= 61.0:
            return None
        return start + timedelta(days=day - 1, hours=hour, minutes=minute, seconds=second)

    if value[-1] in "Zz":
        value = value[:-1] + "+00:00"
    # fromisoformat wants exactly six fractional digits on older interpreters
    value = _FRACTION_RE.sub(lambda m: "." + (m.group(1) + "000000")[:6], value, count=1)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _leading_float(value: str) -> float | None:
    match = _LEADING_NUMBER_RE.match(value)
    if match is None:
        return None
    return float(match.group(1))


def decode_value(key: str, raw: str) -> KvnField:
    """Decode the right-hand side of one KVN line for the given key."""
    value = raw.strip()

    if value in ("true", "false"):
        return KvnField(key, ValueKind.BOOL, value == "true", raw)
    if value == "null":
        return KvnField(key, ValueKind.NULL, None, raw)

    if key == "EPOCH":
        epoch = _strip_quotes(value)
        flagged = parse_epoch(epoch) is None
        if flagged:
            logger.warning("Invalid date format for EPOCH: %s", epoch)
        return KvnField(key, ValueKind.STRING, epoch, raw, flagged=flagged)

    if key in NUMERIC_FIELDS:
        number = _leading_float(value)
        if number is None:
            logger.warning("Non-numeric value for %s: %s", key, value)
            return KvnField(key, ValueKind.STRING, _strip_quotes(value), raw, flagged=True)
        if key == "ECCENTRICITY" and not 0.0 <= number < 1.0:
            logger.warning("ECCENTRICITY value seems invalid: %s", number)
        return KvnField(key, ValueKind.NUMBER, number, raw)

    if _FULL_NUMBER_RE.match(value):
        number = float(value)
        if number.is_integer():
            return KvnField(key, ValueKind.NUMBER, int(number), raw)
        return KvnField(key, ValueKind.NUMBER, number, raw)

    return KvnField(key, ValueKind.STRING, _strip_quotes(value), raw)


def decode_kvn_fields(text: str) -> list[KvnField]:
    """Decode every ``KEY = value`` line of a KVN message, in order.

    Args:
        text: OMM message in KVN format.

    Returns:
        Decoded fields. Lines that do not match the pattern are skipped.
    """
    fields: list[KvnField] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        match = _LINE_RE.match(line)
        if match is None:
            continue
        fields.append(decode_value(match.group(1), match.group(2)))

    logger.debug("Decoded %d KVN fields", len(fields))
    return fields


def decode_kvn(text: str) -> dict[str, object]:
    """Decode a KVN message into an OMM record (field name -> typed value).

    A key repeated later in the message overrides the earlier value.
    """
    return {field.key: field.value for field in decode_kvn_fields(text)}
