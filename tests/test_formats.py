"""Tests for input format detection."""

import pytest

from satlook.core.formats import InputFormat, TleLinePair, detect_format

ISS_LINE1 = "1 25544U 98067A   24045.54896019  .00016717  00000-0  30093-3 0  9993"
ISS_LINE2 = "2 25544  51.6412 207.4925 0004948 290.5508 178.9792 15.49583488439596"


class TestTLEDetection:
    def test_two_line(self) -> None:
        detection = detect_format(f"{ISS_LINE1}\n{ISS_LINE2}")
        assert detection.format is InputFormat.TLE
        assert detection.tle == TleLinePair(ISS_LINE1, ISS_LINE2)

    def test_leading_name_line(self) -> None:
        detection = detect_format(f"ISS (ZARYA)\n{ISS_LINE1}\n{ISS_LINE2}")
        assert detection.format is InputFormat.TLE
        assert detection.tle.line1 == ISS_LINE1
        assert detection.tle.line2 == ISS_LINE2

    def test_blank_lines_and_indentation(self) -> None:
        detection = detect_format(f"\n\n   {ISS_LINE1}   \n\n\t{ISS_LINE2}\n")
        assert detection.format is InputFormat.TLE
        assert detection.tle == TleLinePair(ISS_LINE1, ISS_LINE2)

    def test_first_following_line2_selected(self) -> None:
        other = ISS_LINE2.replace("51.6412", "51.0000")
        detection = detect_format(f"{ISS_LINE1}\n{ISS_LINE2}\n{other}")
        assert detection.tle.line2 == ISS_LINE2

    def test_single_line_not_tle(self) -> None:
        assert detect_format(ISS_LINE1).format is InputFormat.UNRECOGNIZED

    def test_line1_too_deep_not_tle(self) -> None:
        text = f"NAME\nCOMMENT\n{ISS_LINE1}\n{ISS_LINE2}"
        assert detect_format(text).format is InputFormat.UNRECOGNIZED

    def test_line2_before_line1_not_tle(self) -> None:
        assert detect_format(f"{ISS_LINE2}\n{ISS_LINE1}").format is not InputFormat.TLE


class TestOMMDetection:
    def test_kvn(self) -> None:
        text = "OBJECT_NAME = ISS (ZARYA)\nNORAD_CAT_ID = 25544"
        assert detect_format(text).format is InputFormat.OMM_KVN

    def test_json(self) -> None:
        text = '{"OBJECT_NAME": "ISS (ZARYA)", "NORAD_CAT_ID": 25544}'
        detection = detect_format(text)
        assert detection.format is InputFormat.OMM_JSON
        assert detection.tle is None

    def test_json_array(self) -> None:
        assert detect_format('[{"NORAD_CAT_ID": 25544}]').format is InputFormat.OMM_JSON

    def test_object_name_token_without_brace(self) -> None:
        assert detect_format("OBJECT_NAME ISS").format is InputFormat.OMM_JSON

    def test_text_is_trimmed(self) -> None:
        detection = detect_format("   OBJECT_NAME = X   \n")
        assert detection.text == "OBJECT_NAME = X"

    def test_full_kvn_message(self, iss_kvn_text: str) -> None:
        assert detect_format(iss_kvn_text).format is InputFormat.OMM_KVN

    def test_full_json_message(self, iss_omm_json: str) -> None:
        assert detect_format(iss_omm_json).format is InputFormat.OMM_JSON


@pytest.mark.parametrize("text", ["", "   \n ", "hello world", "A = 1\nB = 2"])
def test_unrecognized(text: str) -> None:
    assert detect_format(text).format is InputFormat.UNRECOGNIZED
