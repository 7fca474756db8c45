from influx_metrics import ItemLabel, Tag, parse_health_check_name, parse_item_label
from influx_metrics.adapters.set_items import (
    SetItem,
    distinct_names,
    group_by_tags,
    group_sum,
    single_tag_group,
    tag_identifier,
)
from influx_metrics.utils import split_unescaped

# ---------------------------------------------------------------------------
# Escape-aware splitting
# ---------------------------------------------------------------------------


def test_split_unescaped() -> None:
    assert split_unescaped("a,b,c", ",") == ["a", "b", "c"]
    assert split_unescaped(r"a\,b,c", ",") == ["a,b", "c"]
    assert split_unescaped("a=b=c", "=", maxsplit=1) == ["a", "b=c"]
    assert split_unescaped("", ",") == [""]


def test_split_unescaped_keeps_other_escapes() -> None:
    assert split_unescaped(r"a\=b,c", ",") == [r"a\=b", "c"]


# ---------------------------------------------------------------------------
# Item labels
# ---------------------------------------------------------------------------


def test_plain_label() -> None:
    assert parse_item_label("item1") == ItemLabel("item1", [])


def test_label_with_tags() -> None:
    parsed = parse_item_label("requests,host=web-1,region=eu")
    assert parsed.name == "requests"
    assert parsed.tags == [Tag("host", "web-1"), Tag("region", "eu")]


def test_label_without_name() -> None:
    parsed = parse_item_label("host=web-1,region=eu")
    assert parsed.name == ""
    assert parsed.tags == [Tag("host", "web-1"), Tag("region", "eu")]


def test_label_with_escaped_delimiters() -> None:
    parsed = parse_item_label(r"a\,b,k=v\,w,x\=y=z")
    assert parsed.name == "a,b"
    assert parsed.tags == [Tag("k", "v,w"), Tag("x=y", "z")]


def test_label_skips_malformed_segments() -> None:
    parsed = parse_item_label("item, nokey ,=v,k=, ,good=1")
    assert parsed.name == "item"
    assert parsed.tags == [Tag("good", "1")]


def test_empty_label() -> None:
    assert parse_item_label("") == ItemLabel("", [])
    assert parse_item_label(None) == ItemLabel("", [])


# ---------------------------------------------------------------------------
# Health check names
# ---------------------------------------------------------------------------


def test_health_check_name() -> None:
    assert parse_health_check_name("Health Check 1") == [Tag("name", "health_check_1")]


def test_health_check_name_with_prefix_and_tags() -> None:
    tags = parse_health_check_name("Name=Health Check 5,tag5=Key5")
    assert tags == [Tag("name", "health_check_5"), Tag("tag5", "key5")]


def test_health_check_empty_name() -> None:
    assert parse_health_check_name("") == []


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


def _item(label: str, count: int) -> SetItem:
    item = SetItem(label)
    item.add_integer(SetItem.COUNT, count)
    return item


def test_tag_identifier_is_order_independent() -> None:
    assert tag_identifier([Tag("b", "2"), Tag("a", "1")]) == "a=1,b=2"
    assert _item("x,b=2,a=1", 1).tag_identifier == _item("y,a=1,b=2", 1).tag_identifier


def test_field_keys() -> None:
    assert _item("item1", 1).field_key(SetItem.COUNT) == "item1_Count"
    assert _item("host=a", 1).field_key(SetItem.MEAN_RATE) == "Mean Rate"


def test_group_by_tags_ignores_untagged_items() -> None:
    items = [_item("a,host=x", 1), _item("b,host=x", 2), _item("c,host=y", 3), _item("d", 4)]
    groups = group_by_tags(items)
    assert sorted(groups) == ["host=x", "host=y"]
    assert group_sum(groups["host=x"], SetItem.COUNT) == 3
    assert distinct_names(groups["host=x"]) == 2
    assert not single_tag_group(items, groups)


def test_single_tag_group() -> None:
    items = [_item("a,host=x", 1), _item("b,host=x", 2)]
    assert single_tag_group(items, group_by_tags(items))
    items.append(_item("c", 3))
    assert not single_tag_group(items, group_by_tags(items))
    assert not single_tag_group([], {})
