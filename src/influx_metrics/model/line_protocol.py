"""Line protocol token rendering — escaping, value encoding and timestamps."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_ESCAPED_CHARS = (" ", ",", "=")


class Precision(str, Enum):
    NANOSECONDS = "ns"
    MICROSECONDS = "us"
    MILLISECONDS = "ms"
    SECONDS = "s"

    @classmethod
    def from_short_name(cls, name: str) -> Precision:
        """Parse an InfluxDB precision specifier such as ``ms`` or ``u``."""
        key = (name or "").strip().lower()
        try:
            return _SHORT_NAMES[key]
        except KeyError:
            raise ValueError(f"Unknown precision specifier {name!r}") from None

    @property
    def nanoseconds(self) -> int:
        return _NANOS_PER_UNIT[self]


_SHORT_NAMES = {
    "n": Precision.NANOSECONDS,
    "ns": Precision.NANOSECONDS,
    "u": Precision.MICROSECONDS,
    "us": Precision.MICROSECONDS,
    "µ": Precision.MICROSECONDS,
    "µs": Precision.MICROSECONDS,
    "ms": Precision.MILLISECONDS,
    "s": Precision.SECONDS,
}

_NANOS_PER_UNIT = {
    Precision.NANOSECONDS: 1,
    Precision.MICROSECONDS: 1_000,
    Precision.MILLISECONDS: 1_000_000,
    Precision.SECONDS: 1_000_000_000,
}


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


def escape(text: str) -> str:
    """Escape a measurement name, tag key, tag value or field key.

    Only space, comma and equals sign are escaped. Double quotes and
    backslashes are passed through untouched.
    """
    for ch in _ESCAPED_CHARS:
        text = text.replace(ch, "\\" + ch)
    return text


def unescape(text: str) -> str:
    """Inverse of :func:`escape`."""
    for ch in _ESCAPED_CHARS:
        text = text.replace("\\" + ch, ch)
    return text


# ---------------------------------------------------------------------------
# Field values
# ---------------------------------------------------------------------------


def format_string_value(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_integer(value: int) -> str:
    return f"{value}i"


def format_boolean(value: bool) -> str:
    return "True" if value else "False"


def format_float(value: float) -> str:
    """Render ``value`` as the shortest text that round-trips.

    15 significant digits are tried first and 17 used only when they are
    needed, so ``100.0`` prints ``100`` and ``math.pi`` prints
    ``3.1415926535897931``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    text = format(value, ".15g")
    if float(text) != value:
        text = format(value, ".17g")
    return text.replace("e", "E")


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def to_epoch_nanoseconds(instant: datetime) -> int:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    delta = instant - _EPOCH
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    return micros * 1_000


def format_timestamp(instant: datetime, precision: Precision = Precision.MILLISECONDS) -> str:
    """Encode ``instant`` as an integer epoch value, truncated to ``precision``."""
    nanos = to_epoch_nanoseconds(instant)
    divisor = Precision(precision).nanoseconds
    # Truncate toward zero, including instants before the epoch.
    value = abs(nanos) // divisor
    return str(-value if nanos < 0 else value)
