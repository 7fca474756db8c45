"""Line protocol data model: tags, fields, records and batches."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from .line_protocol import (
    Precision,
    escape,
    format_boolean,
    format_float,
    format_integer,
    format_string_value,
    format_timestamp,
)


class Tag:
    """An indexed ``key=value`` dimension on a record."""

    __slots__ = ("key", "value")

    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value

    @property
    def is_valid(self) -> bool:
        return bool(self.key and self.key.strip() and self.value and self.value.strip())

    def to_line_protocol(self) -> str:
        return f"{escape(self.key)}={escape(self.value)}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self.key == other.key and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.key, self.value))

    def __repr__(self) -> str:
        return f"Tag(key={self.key!r}, value={self.value!r})"

    def __str__(self) -> str:
        return self.to_line_protocol()


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


class FieldKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"


def _infer_kind(value: Any) -> FieldKind:
    # bool is a subclass of int, so it has to be checked first.
    if isinstance(value, bool):
        return FieldKind.BOOLEAN
    if isinstance(value, int):
        return FieldKind.INTEGER
    if isinstance(value, (float, Decimal)):
        return FieldKind.FLOAT
    if isinstance(value, str):
        return FieldKind.STRING
    raise TypeError(f"Unsupported field value type: {type(value).__name__}")


def _coerce(value: Any, kind: FieldKind) -> Any:
    if kind is FieldKind.BOOLEAN and isinstance(value, bool):
        return value
    if kind is FieldKind.INTEGER and isinstance(value, int) and not isinstance(value, bool):
        return value
    if kind is FieldKind.FLOAT and isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return float(value)
    if kind is FieldKind.STRING and isinstance(value, str):
        return value
    raise TypeError(f"Value {value!r} cannot be stored in a {kind.value} field")


class Field:
    """A typed value column on a record.

    Exactly one of the four kinds is active. The kind is inferred from the
    Python type unless given explicitly; there is no conversion between kinds.
    """

    __slots__ = ("key", "value", "kind")

    def __init__(self, key: str, value: Any, kind: FieldKind | None = None) -> None:
        if not key or not key.strip():
            raise ValueError("Field key must not be empty")
        kind = _infer_kind(value) if kind is None else FieldKind(kind)
        self.key = key
        self.value = _coerce(value, kind)
        self.kind = kind

    @classmethod
    def integer(cls, key: str, value: int) -> Field:
        return cls(key, value, FieldKind.INTEGER)

    @classmethod
    def floating(cls, key: str, value: float) -> Field:
        return cls(key, value, FieldKind.FLOAT)

    @classmethod
    def boolean(cls, key: str, value: bool) -> Field:
        return cls(key, value, FieldKind.BOOLEAN)

    @classmethod
    def string(cls, key: str, value: str) -> Field:
        return cls(key, value, FieldKind.STRING)

    def format_value(self) -> str:
        if self.kind is FieldKind.INTEGER:
            return format_integer(self.value)
        if self.kind is FieldKind.FLOAT:
            return format_float(self.value)
        if self.kind is FieldKind.BOOLEAN:
            return format_boolean(self.value)
        return format_string_value(self.value)

    def to_line_protocol(self) -> str:
        return f"{escape(self.key)}={self.format_value()}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return (self.key, self.kind, self.value) == (other.key, other.kind, other.value)

    def __hash__(self) -> int:
        return hash((self.key, self.kind, self.value))

    def __repr__(self) -> str:
        return f"Field(key={self.key!r}, value={self.value!r}, kind={self.kind.value!r})"

    def __str__(self) -> str:
        return self.to_line_protocol()


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class Record:
    """One line protocol data point."""

    def __init__(
        self,
        measurement: str,
        fields: Iterable[Field],
        tags: Iterable[Tag] = (),
        timestamp: datetime | None = None,
    ) -> None:
        if not measurement or not measurement.strip():
            raise ValueError("Record measurement must not be empty")
        field_list = list(fields)
        if not field_list:
            raise ValueError(f"Record {measurement!r} must have at least one field")

        # Last key wins; dict insertion order keeps the first position.
        by_key: dict[str, Tag] = {}
        for tag in tags:
            if tag.is_valid:
                by_key[tag.key] = tag

        self.measurement = measurement
        self.tags: tuple[Tag, ...] = tuple(by_key.values())
        self.fields: tuple[Field, ...] = tuple(field_list)
        self.timestamp = timestamp

    def to_line_protocol(self, precision: Precision = Precision.MILLISECONDS) -> str:
        head = escape(self.measurement)
        if self.tags:
            head += "," + ",".join(t.to_line_protocol() for t in self.tags)
        line = f"{head} {','.join(f.to_line_protocol() for f in self.fields)}"
        if self.timestamp is not None:
            line += " " + format_timestamp(self.timestamp, precision)
        return line

    def __repr__(self) -> str:
        return (
            f"Record(measurement={self.measurement!r}, tags={list(self.tags)!r}, "
            f"fields={list(self.fields)!r}, timestamp={self.timestamp!r})"
        )

    def __str__(self) -> str:
        return self.to_line_protocol()


class Batch:
    """An ordered, append-only collection of records."""

    def __init__(self, records: Iterable[Record] | None = None) -> None:
        self._records: list[Record] = list(records or [])

    def add(self, record: Record) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[Record]) -> None:
        self._records.extend(records)

    def clear(self) -> None:
        self._records.clear()

    def to_line_protocol(self, precision: Precision = Precision.MILLISECONDS) -> str:
        return "\n".join(r.to_line_protocol(precision) for r in self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __getitem__(self, index: int) -> Record:
        return self._records[index]

    def __repr__(self) -> str:
        return f"Batch({len(self._records)} records)"
