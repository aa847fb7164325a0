"""Tests for the pure scalar decoders in yamlbuild.scalars."""

import datetime
import math

import pytest

from yamlbuild import scalars


class TestParseBool:
    """Boolean synonym table."""

    @pytest.mark.parametrize('text', ['yes', 'Yes', 'YES', 'true', 'True', 'TRUE', 'on', 'On', 'ON'])
    def test_true_spellings(self, text):
        assert scalars.parse_bool(text) is True

    @pytest.mark.parametrize('text', ['no', 'No', 'NO', 'false', 'False', 'FALSE', 'off', 'Off', 'OFF'])
    def test_false_spellings(self, text):
        assert scalars.parse_bool(text) is False

    @pytest.mark.parametrize('text', ['Y', 'n', 'tRUE', 'yEs', '1', ''])
    def test_other_spellings_rejected(self, text):
        """Only the exact case variants in the table are booleans."""
        with pytest.raises(ValueError):
            scalars.parse_bool(text)


class TestParseInt:
    """YAML 1.1 integers."""

    def test_hex(self):
        assert scalars.parse_int('0x1A') == 26

    def test_binary(self):
        assert scalars.parse_int('0b101') == 5

    def test_octal(self):
        """A leading zero means base 8."""
        assert scalars.parse_int('017') == 15

    def test_sexagesimal(self):
        assert scalars.parse_int('1:02:03') == 3723

    def test_negative_sexagesimal(self):
        assert scalars.parse_int('-1:30') == -90

    def test_negative_hex(self):
        assert scalars.parse_int('-0x10') == -16

    def test_plus_sign(self):
        assert scalars.parse_int('+42') == 42

    def test_zero(self):
        assert scalars.parse_int('0') == 0
        assert scalars.parse_int('-0') == 0

    def test_separators_stripped(self):
        assert scalars.parse_int('1_000_000') == 1000000
        assert scalars.parse_int('1,000') == 1000

    def test_huge_decimal_does_not_overflow(self):
        text = '123456789012345678901234567890'
        assert scalars.parse_int(text) == 123456789012345678901234567890

    def test_huge_hex(self):
        assert scalars.parse_int('0x' + 'f' * 32) == 2 ** 128 - 1

    @pytest.mark.parametrize('text', ['', '-', '0x', '0xZZ', '08', '0b102', '12a', '1:x', '--5', '+-5', ' 5'])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            scalars.parse_int(text)


class TestParseFloat:
    """YAML 1.1 floats."""

    def test_plain(self):
        assert scalars.parse_float('3.14') == 3.14

    def test_exponent(self):
        assert scalars.parse_float('1.5e10') == 1.5e10

    def test_positive_infinity(self):
        assert scalars.parse_float('.inf') == math.inf
        assert scalars.parse_float('+.Inf') == math.inf

    def test_negative_infinity(self):
        assert scalars.parse_float('-.inf') == -math.inf
        assert scalars.parse_float('-.INF') == -math.inf

    def test_nan(self):
        value = scalars.parse_float('.nan')
        assert math.isnan(value)
        assert value != value

    def test_nan_case_insensitive(self):
        assert math.isnan(scalars.parse_float('.NaN'))

    def test_sexagesimal(self):
        assert scalars.parse_float('1:30.5') == 90.5

    def test_negative_sexagesimal(self):
        assert scalars.parse_float('-1:00') == -60.0

    def test_separators_stripped(self):
        assert scalars.parse_float('1_000.5') == 1000.5

    @pytest.mark.parametrize('text', ['', '.', 'inf', 'nan', 'abc', '1.2.3'])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            scalars.parse_float(text)


class TestParseBinary:
    """Base64 binary."""

    def test_decode(self):
        assert scalars.parse_binary('aGVsbG8=') == b'hello'

    def test_line_breaks_ignored(self):
        assert scalars.parse_binary('aGVs\r\nbG8=\n') == b'hello'

    def test_invalid(self):
        with pytest.raises(ValueError):
            scalars.parse_binary('not base64!')


class TestParseTimestamp:
    """Timestamps and their zone policies."""

    def test_date_only_is_midnight(self):
        assert scalars.parse_timestamp('2001-12-14') == datetime.datetime(2001, 12, 14)

    def test_single_digit_month_and_day(self):
        assert scalars.parse_timestamp('2001-2-3') == datetime.datetime(2001, 2, 3)

    def test_no_zone_is_naive(self):
        value = scalars.parse_timestamp('2001-12-14 21:59:43')
        assert value == datetime.datetime(2001, 12, 14, 21, 59, 43)
        assert value.tzinfo is None

    def test_t_separator(self):
        assert scalars.parse_timestamp('2001-12-14T21:59:43') == \
            datetime.datetime(2001, 12, 14, 21, 59, 43)

    def test_fraction_padded_to_microseconds(self):
        value = scalars.parse_timestamp('2001-12-14 21:59:43.1')
        assert value.microsecond == 100000

    def test_fraction_truncated_to_microseconds(self):
        value = scalars.parse_timestamp('2001-12-14 21:59:43.123456789')
        assert value.microsecond == 123456

    def test_utc(self):
        value = scalars.parse_timestamp('2001-12-14t21:59:43.10Z')
        assert value == datetime.datetime(2001, 12, 14, 21, 59, 43, 100000,
                                          tzinfo=datetime.timezone.utc)

    def test_lowercase_z(self):
        value = scalars.parse_timestamp('2001-12-14 21:59:43z')
        assert value.tzinfo is datetime.timezone.utc

    def test_local_policy_shifts_by_offset_difference(self):
        """10:00+02:00 seen from UTC+01:00 is 09:00 local."""
        value = scalars.parse_timestamp('2001-12-14 10:00:00 +02:00', 'local',
                                        datetime.timedelta(hours=1))
        assert value == datetime.datetime(2001, 12, 14, 9, 0, 0)
        assert value.tzinfo is None

    def test_local_policy_negative_offset(self):
        value = scalars.parse_timestamp('2001-12-14 21:59:43.10-5', 'local',
                                        datetime.timedelta(0))
        assert value == datetime.datetime(2001, 12, 15, 2, 59, 43, 100000)

    def test_local_policy_uses_process_timezone(self):
        value = scalars.parse_timestamp('2001-12-14 10:00:00 +00:00')
        local = datetime.datetime(2001, 12, 14, 10).astimezone().utcoffset()
        assert value == datetime.datetime(2001, 12, 14, 10) + local

    def test_utc_policy(self):
        value = scalars.parse_timestamp('2001-12-14 10:00:00 +02:30', 'utc')
        assert value == datetime.datetime(2001, 12, 14, 7, 30, tzinfo=datetime.timezone.utc)
        assert value.tzinfo is datetime.timezone.utc

    def test_offset_policy_keeps_offset(self):
        value = scalars.parse_timestamp('2001-12-14 10:00:00 -05:00', 'offset')
        assert value.utcoffset() == datetime.timedelta(hours=-5)
        assert value.hour == 10

    def test_no_match_returns_none(self):
        assert scalars.parse_timestamp('yesterday') is None
        assert scalars.parse_timestamp('2001-12-14 21:59') is None

    def test_impossible_date(self):
        with pytest.raises(ValueError):
            scalars.parse_timestamp('2001-13-40')

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            scalars.parse_timestamp('2001-12-14', 'julian')


class TestParseDate:
    """Date-only timestamps."""

    def test_date(self):
        assert scalars.parse_date('2002-1-2') == datetime.date(2002, 1, 2)

    def test_rejects_time(self):
        with pytest.raises(ValueError):
            scalars.parse_date('2002-01-02 10:00:00')
