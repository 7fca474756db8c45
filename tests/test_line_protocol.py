import math
import sys
from datetime import datetime, timedelta, timezone

import pytest

from influx_metrics.model.line_protocol import (
    Precision,
    escape,
    format_boolean,
    format_float,
    format_integer,
    format_string_value,
    format_timestamp,
    unescape,
)

# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("key1", "key1"),
        ("key2 with spaces", r"key2\ with\ spaces"),
        ("key3,with,commas", r"key3\,with\,commas"),
        ("key4=with=equals", r"key4\=with\=equals"),
        ('key5"with"quot', 'key5"with"quot'),
        ('key6" with,all=', r'key6"\ with\,all\='),
    ],
)
def test_escape(raw: str, expected: str) -> None:
    assert escape(raw) == expected


@pytest.mark.parametrize("raw", ["a b", "a,b", "a=b", " ,= ", 'x" y,z=w', "plain"])
def test_escape_is_reversible(raw: str) -> None:
    escaped = escape(raw)
    assert unescape(escaped) == raw
    assert escaped.count("\\") == sum(raw.count(ch) for ch in " ,=")


def test_string_value_escapes_quotes_and_backslashes_only() -> None:
    assert format_string_value("string value1") == '"string value1"'
    assert format_string_value('string"value2') == '"string\\"value2"'
    assert format_string_value("back\\slash") == '"back\\\\slash"'
    assert format_string_value("a,b=c") == '"a,b=c"'


# ---------------------------------------------------------------------------
# Numbers and booleans
# ---------------------------------------------------------------------------


def test_integer_and_boolean() -> None:
    assert format_integer(100) == "100i"
    assert format_integer(-100) == "-100i"
    assert format_boolean(True) == "True"
    assert format_boolean(False) == "False"


@pytest.mark.parametrize(
    "value, expected",
    [
        (123456789.123456, "123456789.123456"),
        (-123456789.123456, "-123456789.123456"),
        (math.pi, "3.1415926535897931"),
        (sys.float_info.max, "1.7976931348623157E+308"),
        (-sys.float_info.max, "-1.7976931348623157E+308"),
        (100.0, "100"),
        (25.0, "25"),
        (0.0, "0"),
        (10.1, "10.1"),
        (123.456, "123.456"),
    ],
)
def test_format_float_round_trips(value: float, expected: str) -> None:
    assert format_float(value) == expected
    assert float(expected) == value


def test_format_float_non_finite() -> None:
    assert format_float(float("nan")) == "NaN"
    assert format_float(float("inf")) == "Infinity"
    assert format_float(float("-inf")) == "-Infinity"


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

_INSTANT = datetime(2016, 6, 1, 0, 0, 1, 987654, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "precision, expected",
    [
        (Precision.NANOSECONDS, "1464739201987654000"),
        (Precision.MICROSECONDS, "1464739201987654"),
        (Precision.MILLISECONDS, "1464739201987"),
        (Precision.SECONDS, "1464739201"),
    ],
)
def test_format_timestamp_truncates(precision: Precision, expected: str) -> None:
    assert format_timestamp(_INSTANT, precision) == expected


def test_format_timestamp_defaults_to_milliseconds_and_utc_for_naive() -> None:
    naive = datetime(2016, 6, 1)
    assert format_timestamp(naive) == "1464739200000"


def test_format_timestamp_respects_offsets() -> None:
    plus_two = datetime(2016, 6, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(plus_two, Precision.SECONDS) == "1464739200"


def test_format_timestamp_truncates_toward_zero_before_epoch() -> None:
    before = datetime(1969, 12, 31, 23, 59, 59, 500000, tzinfo=timezone.utc)
    assert format_timestamp(before, Precision.SECONDS) == "0"
    assert format_timestamp(before, Precision.MILLISECONDS) == "-500"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("n", Precision.NANOSECONDS),
        ("ns", Precision.NANOSECONDS),
        ("u", Precision.MICROSECONDS),
        ("US", Precision.MICROSECONDS),
        ("µ", Precision.MICROSECONDS),
        ("ms", Precision.MILLISECONDS),
        ("s", Precision.SECONDS),
    ],
)
def test_precision_from_short_name(name: str, expected: Precision) -> None:
    assert Precision.from_short_name(name) is expected


def test_precision_from_short_name_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        Precision.from_short_name("fortnight")
