"""Scalar text decoders.

Pure functions turning the text of a scalar node into a Python value. They
raise ValueError on text that does not fit the grammar; the tag decoders in
yamlbuild.tags turn that into a ScalarParseError carrying the node's tag.
"""

import base64
import binascii
import datetime
import math
import re

BOOL_VALUES = {
    'yes': True, 'Yes': True, 'YES': True,
    'no': False, 'No': False, 'NO': False,
    'true': True, 'True': True, 'TRUE': True,
    'false': False, 'False': False, 'FALSE': False,
    'on': True, 'On': True, 'ON': True,
    'off': False, 'Off': False, 'OFF': False,
}

TIMESTAMP_POLICIES = ('local', 'utc', 'offset')

_DIGITS = {
    2: re.compile(r'^[01]+$'),
    8: re.compile(r'^[0-7]+$'),
    10: re.compile(r'^[0-9]+$'),
    16: re.compile(r'^[0-9a-fA-F]+$'),
}

_FLOAT_REGEXP = re.compile(r'^(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?$')

# Time part and zone are both optional; a bare date means midnight
_TIMESTAMP_REGEXP = re.compile(
    r'^(?P<year>-?[0-9][0-9][0-9][0-9])'
    r'-(?P<month>[0-9][0-9]?)'
    r'-(?P<day>[0-9][0-9]?)'
    r'(?:(?:[Tt]|[ \t]+)'
    r'(?P<hour>[0-9][0-9]?)'
    r':(?P<minute>[0-9][0-9])'
    r':(?P<second>[0-9][0-9])'
    r'(?:\.(?P<fraction>[0-9]*))?'
    r'(?:[ \t]*(?P<tz>[Zz]|(?P<tz_sign>[-+])(?P<tz_hour>[0-9][0-9]?)'
    r'(?::(?P<tz_minute>[0-9][0-9]))?))?)?$')

_YMD_REGEXP = re.compile(
    r'^(?P<year>-?[0-9][0-9][0-9][0-9])'
    r'-(?P<month>[0-9][0-9]?)'
    r'-(?P<day>[0-9][0-9]?)$')


def _split_sign(value):
    value = value.replace('_', '').replace(',', '')
    if not value:
        raise ValueError("empty numeric literal")
    if value[0] == '-':
        return -1, value[1:]
    if value[0] == '+':
        return 1, value[1:]
    return 1, value


def _parse_digits(value, base):
    if not _DIGITS[base].match(value):
        raise ValueError("invalid base %d literal %r" % (base, value))
    return int(value, base)


def _parse_decimal(value):
    if not _FLOAT_REGEXP.match(value):
        raise ValueError("invalid float literal %r" % value)
    return float(value)


def _sexagesimal(fields, parse):
    result = 0
    base = 1
    for field in reversed(fields):
        result += parse(field) * base
        base *= 60
    return result


def parse_bool(value):
    """Look up a boolean spelling; raise ValueError for anything else."""
    try:
        return BOOL_VALUES[value]
    except KeyError:
        raise ValueError("not a boolean: %r" % value) from None


def parse_int(value):
    """Parse a YAML 1.1 integer.

    Accepts ``_`` and ``,`` separators, a sign, ``0b``/``0x``/leading-``0``
    prefixes and base 60 ``h:m:s`` notation.

    >>> parse_int('0x1A'), parse_int('017'), parse_int('1:02:03')
    (26, 15, 3723)
    """
    sign, value = _split_sign(value)
    if value == '0':
        return 0
    if value.startswith('0b'):
        return sign * _parse_digits(value[2:], 2)
    if value.startswith('0x'):
        return sign * _parse_digits(value[2:], 16)
    if value.startswith('0'):
        return sign * _parse_digits(value[1:], 8)
    if ':' in value:
        return sign * _sexagesimal(value.split(':'), lambda field: _parse_digits(field, 10))
    return sign * _parse_digits(value, 10)


def parse_float(value):
    """Parse a YAML 1.1 float, including ``.inf``, ``.nan`` and base 60."""
    sign, value = _split_sign(value)
    lowered = value.lower()
    if lowered == '.inf':
        return sign * math.inf
    if lowered == '.nan':
        return math.nan
    if ':' in value:
        return sign * float(_sexagesimal(value.split(':'), _parse_decimal))
    return sign * _parse_decimal(value)


def parse_binary(value):
    """Decode base64 text, ignoring line breaks."""
    value = value.replace('\r', '').replace('\n', '')
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError("invalid base64 data: %s" % exc) from exc


def local_utc_offset(when):
    """Return the process timezone's UTC offset at naive local time *when*."""
    try:
        return when.astimezone().utcoffset()
    except (OverflowError, OSError) as exc:
        raise ValueError("cannot determine local offset for %s" % when) from exc


def parse_date(value):
    """Parse a date-only ``YYYY-M-D`` timestamp into a datetime.date."""
    match = _YMD_REGEXP.match(value)
    if match is None:
        raise ValueError("invalid date %r" % value)
    return datetime.date(int(match.group('year')), int(match.group('month')),
                         int(match.group('day')))


def parse_timestamp(value, policy='local', local_offset=None):
    """Parse a YAML 1.1 timestamp.

    Returns None when *value* does not match the timestamp grammar at all;
    raises ValueError when it matches but names an impossible date or time.

    The zone handling depends on *policy*:

    - ``'local'``: a ``Z`` value is aware UTC. A value with an explicit
      offset is shifted by the difference between the local offset and the
      given one and returned as naive local time.
    - ``'utc'``: zoned values are converted to aware UTC.
    - ``'offset'``: zoned values keep a fixed-offset tzinfo.

    Values without a zone are naive in every policy. *local_offset* is a
    timedelta overriding the process timezone, used by the ``'local'``
    policy. Shifting past the supported date range raises OverflowError.
    """
    if policy not in TIMESTAMP_POLICIES:
        raise ValueError("unknown timestamp policy %r" % policy)
    match = _TIMESTAMP_REGEXP.match(value)
    if match is None:
        return None
    values = match.groupdict()
    year = int(values['year'])
    month = int(values['month'])
    day = int(values['day'])
    hour = int(values['hour']) if values['hour'] else 0
    minute = int(values['minute']) if values['minute'] else 0
    second = int(values['second']) if values['second'] else 0
    fraction = 0
    if values['fraction']:
        fraction = int(values['fraction'][:6].ljust(6, '0'))
    stamp = datetime.datetime(year, month, day, hour, minute, second, fraction)

    tz = values['tz']
    if not tz:
        return stamp
    if tz in ('Z', 'z'):
        return stamp.replace(tzinfo=datetime.timezone.utc)

    tz_sign = -1 if values['tz_sign'] == '-' else 1
    tz_minute = int(values['tz_minute']) if values['tz_minute'] else 0
    delta = tz_sign * datetime.timedelta(hours=int(values['tz_hour']), minutes=tz_minute)
    if policy == 'local':
        if local_offset is None:
            local_offset = local_utc_offset(stamp)
        return stamp + (local_offset - delta)
    stamp = stamp.replace(tzinfo=datetime.timezone(delta))
    if policy == 'utc':
        return stamp.astimezone(datetime.timezone.utc)
    return stamp
