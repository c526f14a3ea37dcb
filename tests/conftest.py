"""Shared element sets used across the test suite (no network calls)."""

from __future__ import annotations

import json

import pytest

# ISS (ZARYA) TLE, a well-known reference
ISS_NAME = "ISS (ZARYA)"
ISS_LINE1 = "1 25544U 98067A   24045.54896019  .00016717  00000-0  30093-3 0  9993"
ISS_LINE2 = "2 25544  51.6412 207.4925 0004948 290.5508 178.9792 15.49583488439596"

# The same elements as an OMM record
ISS_OMM = {
    "OBJECT_NAME": "ISS (ZARYA)",
    "OBJECT_ID": "1998-067A",
    "EPOCH": "2024-02-14T13:10:30.160416",
    "MEAN_MOTION": 15.49583488,
    "ECCENTRICITY": 0.0004948,
    "INCLINATION": 51.6412,
    "RA_OF_ASC_NODE": 207.4925,
    "ARG_OF_PERICENTER": 290.5508,
    "MEAN_ANOMALY": 178.9792,
    "EPHEMERIS_TYPE": 0,
    "CLASSIFICATION_TYPE": "U",
    "NORAD_CAT_ID": 25544,
    "ELEMENT_SET_NO": 999,
    "REV_AT_EPOCH": 43959,
    "BSTAR": 0.00030093,
    "MEAN_MOTION_DOT": 0.00016717,
    "MEAN_MOTION_DDOT": 0,
}

ISS_KVN = """\
CCSDS_OMM_VERS = 2.0
COMMENT = Sample Satellite
CREATION_DATE = 2023-085T12:00:00.000
ORIGINATOR = JSpOC
OBJECT_NAME = ISS (ZARYA)
OBJECT_ID = 1998-067A
CENTER_NAME = EARTH
REF_FRAME = ITRF97
TIME_SYSTEM = UTC
MEAN_ELEMENT_THEORY = SGP4
EPOCH = 2023-03-26T05:19:34.116960
MEAN_MOTION = 15.49598850
ECCENTRICITY = 0.000315
INCLINATION = 51.6435
RA_OF_ASC_NODE = 106.9059
ARG_OF_PERICENTER = 268.2073
MEAN_ANOMALY = 91.8026
EPHEMERIS_TYPE = 0
CLASSIFICATION_TYPE = U
NORAD_CAT_ID = 25544
ELEMENT_SET_NO = 999
REV_AT_EPOCH = 12345
BSTAR = 0.000036618
MEAN_MOTION_DOT = 0.00003322
MEAN_MOTION_DDOT = 0
"""


@pytest.fixture
def iss_tle_text() -> str:
    return f"{ISS_NAME}\n{ISS_LINE1}\n{ISS_LINE2}"


@pytest.fixture
def iss_omm_json() -> str:
    return json.dumps(ISS_OMM, indent=2)


@pytest.fixture
def iss_omm() -> dict:
    return dict(ISS_OMM)


@pytest.fixture
def iss_kvn_text() -> str:
    return ISS_KVN
