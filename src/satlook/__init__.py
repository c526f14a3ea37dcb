"""
satlook: where is that satellite from here?

Reads orbital elements as TLE, OMM-JSON or OMM-KVN, propagates them with
SGP4, and reports look angles, RA/DEC and the sub-satellite point for a
ground observer, optionally refreshing the position live.
"""

from __future__ import annotations

__version__ = "0.1.0-dev"

from satlook.core.formats import InputFormat, Detection, TleLinePair, detect_format
from satlook.core.kvn import KvnField, ValueKind, decode_kvn, decode_kvn_fields
from satlook.core.validation import Verdict, validate_tle, validate_omm
from satlook.core.elements import CanonicalElements, ElementSource, build_elements, from_omm, from_tle
from satlook.core.frames import GeodeticPosition, PositionResult, transform
from satlook.core.observer import DEFAULT_OBSERVER, LIVE, ObserverLocation, TimeSelector, TrackingContext
from satlook.core.scheduler import LiveScheduler, SchedulerState
from satlook.core.pipeline import Submission, Tracker, TrackingSession, track
from satlook.core.errors import (
    InvalidOmmError,
    InvalidTleError,
    PropagationError,
    TrackingError,
    TransformFailure,
    UnrecognizedFormatError,
)

__all__ = [
    "__version__",
    "InputFormat",
    "Detection",
    "TleLinePair",
    "detect_format",
    "KvnField",
    "ValueKind",
    "decode_kvn",
    "decode_kvn_fields",
    "Verdict",
    "validate_tle",
    "validate_omm",
    "CanonicalElements",
    "ElementSource",
    "build_elements",
    "from_omm",
    "from_tle",
    "GeodeticPosition",
    "PositionResult",
    "transform",
    "DEFAULT_OBSERVER",
    "LIVE",
    "ObserverLocation",
    "TimeSelector",
    "TrackingContext",
    "LiveScheduler",
    "SchedulerState",
    "Submission",
    "Tracker",
    "TrackingSession",
    "track",
    "InvalidOmmError",
    "InvalidTleError",
    "PropagationError",
    "TrackingError",
    "TransformFailure",
    "UnrecognizedFormatError",
]
