"""Tests for RA/DEC sexagesimal formatting."""

import pytest

from satlook.utils.formatting import dec_to_dms, format_dec, format_ra, ra_to_hms


class TestRightAscension:
    def test_whole_hours(self) -> None:
        assert ra_to_hms(90.0) == (6, 0, 0.0)

    def test_minutes_and_seconds(self) -> None:
        hours, minutes, seconds = ra_to_hms(82.5 + 0.25 / 60)
        assert (hours, minutes) == (5, 30)
        assert seconds == pytest.approx(1.0)

    def test_format(self) -> None:
        assert format_ra(82.5) == "05h 30m 00.00s"
        assert format_ra(0.0) == "00h 00m 00.00s"


class TestDeclination:
    def test_positive(self) -> None:
        sign, degrees, minutes, seconds = dec_to_dms(45.5)
        assert (sign, degrees, minutes) == (1, 45, 30)
        assert seconds == pytest.approx(0.0, abs=1e-9)

    def test_negative(self) -> None:
        sign, degrees, minutes, seconds = dec_to_dms(-12.5)
        assert (sign, degrees, minutes) == (-1, 12, 30)
        assert seconds == pytest.approx(0.0, abs=1e-9)

    def test_negative_under_one_degree(self) -> None:
        sign, degrees, minutes, _ = dec_to_dms(-0.5)
        assert (sign, degrees, minutes) == (-1, 0, 30)

    def test_format(self) -> None:
        assert format_dec(-12.5) == "-12° 30' 0.00\""
        assert format_dec(90.0) == "90° 0' 0.00\""

    def test_format_keeps_sign_under_one_degree(self) -> None:
        assert format_dec(-0.5) == "-0° 30' 0.00\""
        assert format_dec(0.5) == "0° 30' 0.00\""
