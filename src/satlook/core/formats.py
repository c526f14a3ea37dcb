"""Input format detection for TLE, OMM-JSON and OMM-KVN text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class InputFormat(Enum):
    """Wire format of a raw element set."""

    TLE = "TLE"
    OMM_JSON = "OMM_JSON"
    OMM_KVN = "OMM_KVN"
    UNRECOGNIZED = "UNRECOGNIZED"


@dataclass(frozen=True)
class TleLinePair:
    """The two element lines of a TLE, as entered."""

    line1: str
    line2: str


@dataclass(frozen=True)
class Detection:
    """Outcome of classifying raw input.

    Attributes:
        format: Detected input format.
        text: The trimmed input text.
        tle: The selected line pair when ``format`` is ``InputFormat.TLE``.
    """

    format: InputFormat
    text: str
    tle: TleLinePair | None = None


def _find_tle_pair(lines: list[str]) -> TleLinePair | None:
    if len(lines) < 2:
        return None

    # The "1 " line may follow a single satellite-name line.
    first = next((i for i, line in enumerate(lines[:2]) if line.startswith("1 ")), None)
    if first is None:
        return None

    second = next(
        (i for i in range(first + 1, len(lines)) if lines[i].startswith("2 ")), None
    )
    if second is None:
        return None

    return TleLinePair(lines[first], lines[second])


def detect_format(text: str) -> Detection:
    """Classify raw element text.

    TLE wins when a ``"1 "`` line (optionally after a name line) is followed
    by a ``"2 "`` line. Otherwise text containing ``{`` or ``OBJECT_NAME`` is
    OMM: KVN if it contains ``=``, JSON if not.

    Args:
        text: Raw user input.

    Returns:
        A Detection describing the format and, for TLEs, the line pair.
    """
    text = text.strip()
    lines = [line.strip() for line in text.splitlines() if line.strip()]

    pair = _find_tle_pair(lines)
    if pair is not None:
        logger.debug("Detected TLE input")
        return Detection(InputFormat.TLE, text, pair)

    if "{" in text or "OBJECT_NAME" in text:
        fmt = InputFormat.OMM_KVN if "=" in text else InputFormat.OMM_JSON
        logger.debug("Detected %s input", fmt.value)
        return Detection(fmt, text)

    logger.debug("Input format not recognized")
    return Detection(InputFormat.UNRECOGNIZED, text)
