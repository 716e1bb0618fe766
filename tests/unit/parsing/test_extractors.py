"""Unit tests for field extractors."""

import pytest

from vidprobe.domain import IssueKind, Resolution
from vidprobe.parsing import (
    match_frame_rate,
    match_resolution,
    match_sample_rate,
    parse_invariant_float,
)
from vidprobe.parsing.extractors import MAX_DIMENSION, extract_codec, find_first


class TestParseInvariantFloat:
    """Tests for parse_invariant_float."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("48000", 48000.0),
            ("59.94", 59.94),
            (" 23.976 ", 23.976),
            (".5", 0.5),
            ("25.", 25.0),
            ("1e3", 1000.0),
        ],
    )
    def test_valid_numbers(self, text, expected):
        result = parse_invariant_float(text)
        assert result.success
        assert result.value == expected
        assert result.error is None

    def test_comma_decimal_separator_is_rejected(self):
        """The decimal separator is always "." regardless of locale."""
        result = parse_invariant_float("59,94")
        assert not result.success
        assert result.value is None
        assert "not a decimal number" in result.error

    @pytest.mark.parametrize("text", ["", "abc", "1/2", "nan", "inf", "1.2.3"])
    def test_not_a_number(self, text):
        assert not parse_invariant_float(text).success

    def test_overflow(self):
        result = parse_invariant_float("1e999")
        assert not result.success
        assert "out of range" in result.error

    @pytest.mark.parametrize("text", ["0", "0.0", "-25"])
    def test_non_positive(self, text):
        result = parse_invariant_float(text)
        assert not result.success
        assert "must be positive" in result.error


class TestUnitMatchers:
    """Tests for match_sample_rate and match_frame_rate."""

    def test_sample_rate(self):
        result = match_sample_rate("48000 Hz")
        assert result.success
        assert result.value == 48000.0

    def test_frame_rate(self):
        result = match_frame_rate("59.94 fps")
        assert result.success
        assert result.value == 59.94

    @pytest.mark.parametrize("token", ["stereo", "fltp", "127 kb/s", "48000Hz"])
    def test_sample_rate_shape_mismatch(self, token):
        """Tokens without " Hz" are not sample rates at all."""
        assert match_sample_rate(token) is None

    def test_frame_rate_ignores_tbr(self):
        assert match_frame_rate("59.94 tbr") is None

    def test_malformed_number_with_unit(self):
        result = match_frame_rate("abc fps")
        assert result is not None
        assert not result.success

    def test_zero_sample_rate(self):
        result = match_sample_rate("0 Hz")
        assert result is not None
        assert not result.success


class TestMatchResolution:
    """Tests for match_resolution."""

    def test_resolution_with_aspect_ratio(self):
        result = match_resolution("1920x1080 [SAR 1:1 DAR 16:9]")
        assert result.success
        assert result.value == Resolution(1920, 1080)

    def test_first_occurrence_wins(self):
        result = match_resolution("720x576 then 1280x720")
        assert result.value == Resolution(720, 576)

    def test_no_match(self):
        assert match_resolution("yuv420p") is None

    def test_zero_dimension(self):
        result = match_resolution("0x1080")
        assert not result.success
        assert "invalid resolution" in result.error

    def test_dimension_limit(self):
        result = match_resolution(f"{MAX_DIMENSION}x1")
        assert result.success
        assert result.value.width == MAX_DIMENSION

    def test_dimension_overflow(self):
        result = match_resolution(f"{MAX_DIMENSION + 1}x1080")
        assert not result.success

    def test_very_long_digit_run(self):
        result = match_resolution("9" * 40 + "x1080")
        assert not result.success


class TestExtractCodec:
    """Tests for extract_codec."""

    def test_first_token(self):
        assert extract_codec(["aac", "48000 Hz"]) == "aac"

    def test_empty_token_list(self):
        assert extract_codec([]) is None

    def test_blank_first_token(self):
        assert extract_codec(["", "48000 Hz"]) is None


class TestFindFirst:
    """Tests for find_first."""

    def test_returns_first_valid_value(self):
        value, issues = find_first(
            ["mp3", "44100 Hz", "48000 Hz"], match_sample_rate, "sample_rate_hz"
        )
        assert value == 44100.0
        assert issues == []

    def test_skips_malformed_and_keeps_scanning(self):
        """Test that a malformed candidate yields an issue, not a stop."""
        value, issues = find_first(
            ["0 Hz", "44100 Hz"], match_sample_rate, "sample_rate_hz"
        )

        assert value == 44100.0
        assert len(issues) == 1
        assert issues[0].kind is IssueKind.MALFORMED_NUMBER
        assert issues[0].field_name == "sample_rate_hz"
        assert issues[0].message.startswith("Ignoring sample_rate_hz:")

    def test_no_candidates(self):
        value, issues = find_first(["h264", "yuv420p"], match_frame_rate, "fps")
        assert value is None
        assert issues == []
