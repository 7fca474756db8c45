"""Set-item label parsing and tag-group aggregation.

A set item is a labelled sub-entry of a counter, meter or timer. Its label
may carry comma-separated ``key=value`` fragments, e.g.
``"requests,host=web-1,region=eu"``: the first segment is the item name
unless it is itself a ``key=value`` pair. A backslash before a comma or an
equals sign makes the character literal.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..model.types import Field, Tag
from ..utils import has_unescaped, lower_and_replace_spaces, resolve_escapes, split_unescaped
from .tags import ITEM_NAME_TAG_KEY, to_tag


def _segments(label: str) -> list[str]:
    segments = (s.strip() for s in split_unescaped(label or "", ","))
    return [s for s in segments if s]


def _segment_tag(segment: str) -> Tag | None:
    parts = split_unescaped(segment, "=", maxsplit=1)
    if len(parts) != 2:
        return None
    tag = to_tag(resolve_escapes(parts[0]), resolve_escapes(parts[1]))
    return tag if tag.is_valid else None


class ItemLabel:
    """The parsed form of a set-item label."""

    __slots__ = ("name", "tags")

    def __init__(self, name: str, tags: list[Tag]) -> None:
        self.name = name
        self.tags = tags

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemLabel):
            return NotImplemented
        return self.name == other.name and self.tags == other.tags

    def __repr__(self) -> str:
        return f"ItemLabel(name={self.name!r}, tags={self.tags!r})"


def parse_item_label(label: str | None) -> ItemLabel:
    """Parse a set-item label into its display name and tags.

    Malformed segments (no ``=``, empty key or value) are ignored.
    """
    segments = _segments(label or "")
    name = ""
    if segments and not has_unescaped(segments[0], "="):
        name = resolve_escapes(segments.pop(0))

    tags = [tag for tag in map(_segment_tag, segments) if tag is not None]
    return ItemLabel(name, tags)


def parse_health_check_name(label: str | None) -> list[Tag]:
    """Derive tags from a health check name.

    ``"Health Check 1"`` becomes ``name=health_check_1``; a label that already
    starts with ``name=`` (any case) keeps its value, normalised the same way.
    Further ``key=value`` segments become tags with normalised values.
    """
    segments = _segments(label or "")
    if not segments:
        return []

    first = segments[0]
    if first[:5].lower() == f"{ITEM_NAME_TAG_KEY}=":
        first = first[5:]
    tags: list[Tag] = [to_tag(ITEM_NAME_TAG_KEY, lower_and_replace_spaces(resolve_escapes(first)))]

    for segment in segments[1:]:
        tag = _segment_tag(segment)
        if tag is not None:
            tags.append(to_tag(tag.key, lower_and_replace_spaces(tag.value)))
    return [t for t in tags if t.is_valid]


# ---------------------------------------------------------------------------
# Set items
# ---------------------------------------------------------------------------


class SetItem:
    """A set item being converted: parsed label, output fields and raw values."""

    COUNT = "_Count"
    PERCENT = "_Percent"
    MEAN_RATE = "_Mean Rate"
    ONE_MIN_RATE = "_1 Min Rate"
    FIVE_MIN_RATE = "_5 Min Rate"
    FIFTEEN_MIN_RATE = "_15 Min Rate"

    def __init__(self, label: str | None) -> None:
        parsed = parse_item_label(label)
        self.name = parsed.name
        self.tags = parsed.tags
        self.fields: list[Field] = []
        self.values: dict[str, float] = {}

    @property
    def tag_identifier(self) -> str:
        return tag_identifier(self.tags)

    def field_key(self, suffix: str) -> str:
        # Items without a display name get un-prefixed keys ("Count", not "_Count").
        return f"{self.name}{suffix}" if self.name else suffix[1:]

    def add_integer(self, suffix: str, value: int) -> None:
        self.fields.append(Field.integer(self.field_key(suffix), value))
        self.values[suffix] = value

    def add_float(self, suffix: str, value: float) -> None:
        self.fields.append(Field.floating(self.field_key(suffix), value))
        self.values[suffix] = value

    def __repr__(self) -> str:
        return f"SetItem(name={self.name!r}, tags={self.tags!r})"


def tag_identifier(tags: Iterable[Tag]) -> str:
    """Canonical identifier of a tag set: ``k=v`` pairs sorted by key."""
    return ",".join(f"{t.key}={t.value}" for t in sorted(tags, key=lambda t: (t.key, t.value)))


def group_by_tags(items: Iterable[SetItem]) -> dict[str, list[SetItem]]:
    """Group tagged set items by their canonical tag identifier."""
    groups: dict[str, list[SetItem]] = {}
    for item in items:
        if item.tags:
            groups.setdefault(item.tag_identifier, []).append(item)
    return groups


def group_sum(members: Iterable[SetItem], suffix: str) -> float:
    return sum(m.values.get(suffix, 0) for m in members)


def distinct_names(members: Iterable[SetItem]) -> int:
    return len({m.name for m in members})


def single_tag_group(items: list[SetItem], groups: dict[str, list[SetItem]]) -> bool:
    """True when every item is tagged and all of them share one tag set."""
    return bool(items) and all(i.tags for i in items) and len(groups) == 1

