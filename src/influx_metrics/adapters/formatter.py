"""Name formatting strategy applied to records before they are written."""

from __future__ import annotations

from collections.abc import Iterable

from ..model.types import Field, Record, Tag


class Formatter:
    """Formats measurement names, tag keys and field keys.

    With the defaults names are lowercased and spaces replaced by ``_``, so
    ``"Mean Rate"`` becomes ``mean_rate`` and ``"Health Checks"`` becomes
    ``health_checks``. Tag values are never altered.
    """

    def __init__(self, lowercase: bool = True, replace_space_char: str | None = "_") -> None:
        self.lowercase = lowercase
        self.replace_space_char = replace_space_char

    def format_name(self, name: str) -> str:
        if self.lowercase:
            name = name.lower()
        if self.replace_space_char is not None:
            name = name.replace(" ", self.replace_space_char)
        return name

    def format_context_name(self, context_stack: Iterable[str], context_name: str) -> str:
        parts = [*context_stack, context_name]
        return ".".join(p for p in parts if p)

    def format_metric_name(self, context: str, metric_name: str, metric_type: str | None = None) -> str:
        parts = [context, metric_name, metric_type]
        return self.format_name(".".join(p for p in parts if p))

    def format_tag_key(self, key: str) -> str:
        return self.format_name(key)

    def format_field_key(self, key: str) -> str:
        return self.format_name(key)

    def format_record(self, record: Record) -> Record:
        return Record(
            self.format_name(record.measurement),
            [Field(self.format_field_key(f.key), f.value, f.kind) for f in record.fields],
            [Tag(self.format_tag_key(t.key), t.value) for t in record.tags],
            record.timestamp,
        )
