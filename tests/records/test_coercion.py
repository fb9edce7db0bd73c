"""Tests for recordkit.records.coercion - best-fit typed values from strings."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from recordkit.core.timestamps import to_epoch_millis
from recordkit.records.coercion import parse_typed_value


class TestIntegers:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("+1 234,567,890", 1234567890),
            ("-1234567890", -1234567890),
            ("1.234.567.890", 1234567890),
            ("1234567890-", -1234567890),
            ("42", 42),
        ],
    )
    def test_integers(self, raw, expected):
        value = parse_typed_value(raw)
        assert type(value) is int
        assert value == expected

    def test_int64_bounds(self):
        assert parse_typed_value("9223372036854775807") == 2**63 - 1
        assert parse_typed_value("-9223372036854775808") == -(2**63)

    @pytest.mark.parametrize("raw", ["9223372036854775808", "99999999999999999999"])
    def test_beyond_int64_falls_back_to_text(self, raw):
        assert parse_typed_value(raw) == raw


class TestFloats:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("12,345,678.90", 12345678.90),
            ("12.345.678,90", 12345678.90),
            ("0.12345", 0.12345),
            ("(3.5)", 3.5),
        ],
    )
    def test_floats(self, raw, expected):
        value = parse_typed_value(raw)
        assert type(value) is float
        assert value == pytest.approx(expected)


class TestComplex:
    def test_real_plus_imaginary(self):
        assert parse_typed_value("12,345.678 + 9i") == complex(12345.678, 9)

    def test_real_minus_imaginary(self):
        assert parse_typed_value("3-4i") == complex(3, -4)

    def test_imaginary_first(self):
        assert parse_typed_value("4i+3") == complex(3, 4)


class TestStrings:
    def test_leading_zero_is_an_identifier(self):
        assert parse_typed_value("012345") == "012345"

    def test_text_is_returned_unchanged(self):
        assert parse_typed_value("Last, First") == "Last, First"

    def test_long_text_skips_date_parsing(self):
        text = "a sentence that is well over thirty two characters"
        assert parse_typed_value(text) == text

    @pytest.mark.parametrize("raw", ["..", "...", "."])
    def test_only_periods(self, raw):
        assert parse_typed_value(raw) == raw


class TestBooleans:
    @pytest.mark.parametrize("raw, expected", [("true", True), ("FALSE", False), ("True", True)])
    def test_booleans(self, raw, expected):
        assert parse_typed_value(raw) is expected


class TestTimestamps:
    def test_rfc1123_with_offset(self):
        when = datetime(2024, 1, 15, 9, 30, 5, tzinfo=timezone(timedelta(hours=-7)))
        raw = when.strftime("%a, %d %b %Y %H:%M:%S %z")
        assert parse_typed_value(raw) == to_epoch_millis(when)

    def test_iso_utc(self):
        expected = to_epoch_millis(datetime(2018, 4, 27, 22, tzinfo=UTC))
        assert parse_typed_value("2018-04-27T22:00:00Z") == expected

    def test_epoch_millis_pass_through_as_integer(self):
        assert parse_typed_value("1524866400000") == 1524866400000

    @pytest.mark.parametrize("raw", ["10:30", "Monday", "May", "1st", "15 January"])
    def test_dates_without_a_year_are_text(self, raw):
        assert parse_typed_value(raw) == raw

    def test_date_only(self):
        expected = to_epoch_millis(datetime(2024, 1, 15))
        assert parse_typed_value("January 15 2024") == expected


class TestEmpty:
    def test_empty_is_none(self):
        assert parse_typed_value("") is None

    def test_only_whitespace_is_none(self):
        assert parse_typed_value("   ") is None

    def test_only_brackets_fall_back_to_text(self):
        assert parse_typed_value("()") == "()"
