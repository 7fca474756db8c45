"""Tag-join resolver — merges item, global, call-site and set-item tags."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Union

from ..model.types import Tag
from ..utils import resolve_escapes, split_unescaped

# Anything that can describe a set of tags: a mapping, Tag objects,
# (key, value) pairs or "key=value" strings.
TagSource = Union[
    Mapping[str, str],
    Iterable[Union[Tag, tuple[str, str], str]],
    None,
]

ITEM_NAME_TAG_KEY = "name"


def to_tag(key: str | None, value: str | None) -> Tag:
    """Build a trimmed tag. The result may be invalid; callers filter on ``is_valid``."""
    return Tag((key or "").strip(), (value or "").strip())


def to_tags(source: TagSource) -> list[Tag]:
    """Normalise ``source`` into a list of valid tags, preserving order."""
    if source is None:
        return []
    if isinstance(source, Mapping):
        pairs: Iterable = source.items()
    elif isinstance(source, str):
        pairs = [source]
    else:
        pairs = source

    tags: list[Tag] = []
    for entry in pairs:
        if isinstance(entry, Tag):
            tag = to_tag(entry.key, entry.value)
        elif isinstance(entry, str):
            parts = split_unescaped(entry, "=", maxsplit=1)
            if len(parts) == 2:
                tag = to_tag(resolve_escapes(parts[0]), resolve_escapes(parts[1]))
            else:
                tag = Tag("", "")
        else:
            key, value = entry
            tag = to_tag(key, value)
        if tag.is_valid:
            tags.append(tag)
    return tags


def item_name_tag(item_name: str | None) -> Tag | None:
    """Derive the tag contributed by an item name.

    A plain name becomes ``name=<item>``; a ``key=value`` item is used as is.
    """
    if item_name is None or not item_name.strip():
        return None
    parts = split_unescaped(item_name.strip(), "=", maxsplit=1)
    if len(parts) == 2:
        tag = to_tag(resolve_escapes(parts[0]), resolve_escapes(parts[1]))
    else:
        tag = to_tag(ITEM_NAME_TAG_KEY, resolve_escapes(parts[0]))
    return tag if tag.is_valid else None


def join_tags(item_name: str | None, *sources: TagSource) -> list[Tag]:
    """Merge tag sources in order; later sources overwrite earlier keys.

    The merge order is the item name tag, then ``sources`` in the order given
    (global tags, call-site tags, set-item tags). A key overwritten by a later
    source keeps the position where it was first seen. Empty tags are skipped
    where they appear and never remove an earlier value.
    """
    merged: dict[str, Tag] = {}
    name_tag = item_name_tag(item_name)
    if name_tag is not None:
        merged[name_tag.key] = name_tag
    for source in sources:
        for tag in to_tags(source):
            merged[tag.key] = tag
    return list(merged.values())
