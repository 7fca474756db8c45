from .line_protocol import (
    Precision,
    escape,
    format_boolean,
    format_float,
    format_integer,
    format_string_value,
    format_timestamp,
    unescape,
)
from .types import Batch, Field, FieldKind, Record, Tag

__all__ = [
    "Batch",
    "Field",
    "FieldKind",
    "Precision",
    "Record",
    "Tag",
    "escape",
    "format_boolean",
    "format_float",
    "format_integer",
    "format_string_value",
    "format_timestamp",
    "unescape",
]
