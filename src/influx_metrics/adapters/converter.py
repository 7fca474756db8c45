"""Converts metric value snapshots into line protocol records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..model.types import Field, Record, Tag
from ..schema.health import HealthStatus
from ..schema.values import (
    CounterValue,
    EventDetails,
    EventValue,
    HistogramValue,
    MeterValue,
    TimerValue,
)
from .set_items import (
    SetItem,
    distinct_names,
    group_by_tags,
    group_sum,
    parse_health_check_name,
    single_tag_group,
)
from .tags import TagSource, join_tags, to_tags

logger = logging.getLogger("influx_metrics")

HEALTH_CHECKS_MEASUREMENT = "Health Checks"

# Aggregate fields added to tagged set items ("Item_Count", "Item_Mean Rate", ...).
_ITEM_PREFIX = "Item"

_RATE_SUFFIXES = (
    SetItem.MEAN_RATE,
    SetItem.ONE_MIN_RATE,
    SetItem.FIVE_MIN_RATE,
    SetItem.FIFTEEN_MIN_RATE,
)


@dataclass(frozen=True)
class ConversionContext:
    """Per reporting cycle settings shared by every conversion call.

    ``timestamp`` stamps records that have no instant of their own and
    ``global_tags`` are merged into every record ahead of call-site tags.
    """

    timestamp: datetime | None = None
    global_tags: tuple[Tag, ...] = field(default_factory=tuple)

    @classmethod
    def create(cls, timestamp: datetime | None = None, global_tags: TagSource = None) -> ConversionContext:
        return cls(timestamp=timestamp, global_tags=tuple(to_tags(global_tags)))


def _require(value: Any) -> None:
    if value is None:
        raise ValueError("Metric value must not be None")


def _percent(count: int, total: int) -> float:
    return 100.0 * count / total if total else 0.0


def _rate_fields(value: MeterValue) -> list[Field]:
    return [
        Field.floating("Mean Rate", value.mean_rate),
        Field.floating("1 Min Rate", value.one_minute_rate),
        Field.floating("5 Min Rate", value.five_minute_rate),
        Field.floating("15 Min Rate", value.fifteen_minute_rate),
    ]


def _histogram_fields(value: HistogramValue) -> list[Field]:
    return [
        Field.floating("Last", value.last_value),
        Field.floating("Min", value.min),
        Field.floating("Mean", value.mean),
        Field.floating("Max", value.max),
        Field.floating("StdDev", value.std_dev),
        Field.floating("Median", value.median),
        Field.integer("Sample Size", value.sample_size),
        Field.floating("Percentile 75%", value.percentile_75),
        Field.floating("Percentile 95%", value.percentile_95),
        Field.floating("Percentile 98%", value.percentile_98),
        Field.floating("Percentile 99%", value.percentile_99),
        Field.floating("Percentile 99.9%", value.percentile_999),
    ]


def _meter_rates(value: MeterValue) -> dict[str, float]:
    return {
        SetItem.MEAN_RATE: value.mean_rate,
        SetItem.ONE_MIN_RATE: value.one_minute_rate,
        SetItem.FIVE_MIN_RATE: value.five_minute_rate,
        SetItem.FIFTEEN_MIN_RATE: value.fifteen_minute_rate,
    }


class Converter:
    """Turns metric values into :class:`Record` objects.

    The converter holds no per-cycle state: the timestamp and global tags
    arrive with every call as a :class:`ConversionContext`.

    ``split_timer_items`` emits a timer's rate set items as separate records
    ahead of the combined timer record. ``event_fields_as_strings`` renders
    every event payload value as a string field instead of its native kind.
    """

    def __init__(self, *, split_timer_items: bool = False, event_fields_as_strings: bool = False) -> None:
        self.split_timer_items = split_timer_items
        self.event_fields_as_strings = event_fields_as_strings

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def get_records(
        self,
        name: str,
        tags: TagSource,
        unit: str | None,
        value: Any,
        context: ConversionContext,
    ) -> list[Record]:
        """Convert any supported metric value into records."""
        _require(value)
        if isinstance(value, bool):
            raise TypeError("Unsupported metric value type: bool")
        if isinstance(value, (int, float)):
            return self.get_gauge_records(name, tags, unit, value, context)
        if isinstance(value, CounterValue):
            return self.get_counter_records(name, tags, unit, value, context)
        if isinstance(value, MeterValue):
            return self.get_meter_records(name, tags, unit, value, context)
        if isinstance(value, HistogramValue):
            return self.get_histogram_records(name, tags, unit, value, context)
        if isinstance(value, TimerValue):
            return self.get_timer_records(name, tags, unit, value, context)
        if isinstance(value, EventValue):
            return self.get_event_records(name, tags, value, context)
        raise TypeError(f"Unsupported metric value type: {type(value).__name__}")

    # ------------------------------------------------------------------
    # Gauge / Histogram
    # ------------------------------------------------------------------

    def get_gauge_records(
        self, name: str, tags: TagSource, unit: str | None, value: float, context: ConversionContext
    ) -> list[Record]:
        _require(value)
        return [self.get_record(name, tags, [Field.floating("Value", value)], context)]

    def get_histogram_records(
        self, name: str, tags: TagSource, unit: str | None, value: HistogramValue, context: ConversionContext
    ) -> list[Record]:
        _require(value)
        fields = [Field.integer("Count", value.count), *_histogram_fields(value)]
        return [self.get_record(name, tags, fields, context)]

    # ------------------------------------------------------------------
    # Counter
    # ------------------------------------------------------------------

    def get_counter_records(
        self, name: str, tags: TagSource, unit: str | None, value: CounterValue, context: ConversionContext
    ) -> list[Record]:
        _require(value)
        items: list[SetItem] = []
        for i in value.items:
            item = SetItem(i.item)
            item.add_integer(SetItem.COUNT, i.count)
            item.add_float(SetItem.PERCENT, i.percent if i.percent is not None else _percent(i.count, value.count))
            items.append(item)

        groups = group_by_tags(items)
        records = []
        for item in items:
            fields = list(item.fields)
            if item.tags:
                members = groups[item.tag_identifier]
                count = value.count if len(items) == 1 else int(group_sum(members, SetItem.COUNT))
                fields.append(Field.integer(_ITEM_PREFIX + SetItem.COUNT, count))
            records.append(self._item_record(name, tags, item, fields, context))

        if not single_tag_group(items, groups):
            records.append(self.get_record(name, tags, [Field.integer("Count", value.count)], context))
        return records

    # ------------------------------------------------------------------
    # Meter
    # ------------------------------------------------------------------

    def get_meter_records(
        self, name: str, tags: TagSource, unit: str | None, value: MeterValue, context: ConversionContext
    ) -> list[Record]:
        _require(value)
        items = self._meter_set_items(value)
        records = self._meter_item_records(name, tags, value, items, context)
        if not single_tag_group(items, group_by_tags(items)):
            fields = [Field.integer("Count", value.count), *_rate_fields(value)]
            records.append(self.get_record(name, tags, fields, context))
        return records

    def _meter_set_items(self, value: MeterValue) -> list[SetItem]:
        items = []
        for i in value.items:
            item = SetItem(i.item)
            item.add_integer(SetItem.COUNT, i.value.count)
            item.add_float(SetItem.PERCENT, i.percent if i.percent is not None else _percent(i.value.count, value.count))
            for suffix, rate in _meter_rates(i.value).items():
                item.add_float(suffix, rate)
            items.append(item)
        return items

    def _meter_item_records(
        self,
        name: str,
        tags: TagSource,
        value: MeterValue,
        items: list[SetItem],
        context: ConversionContext,
    ) -> list[Record]:
        groups = group_by_tags(items)
        single = len(items) == 1
        totals = _meter_rates(value)

        records = []
        for item in items:
            fields = list(item.fields)
            if item.tags:
                members = groups[item.tag_identifier]
                count = value.count if single else int(group_sum(members, SetItem.COUNT))
                fields.append(Field.integer(_ITEM_PREFIX + SetItem.COUNT, count))
                if not single:
                    fields.append(Field.floating(_ITEM_PREFIX + SetItem.PERCENT, group_sum(members, SetItem.PERCENT)))
                # Grouped rates are averaged over the distinct item names of the group.
                names = distinct_names(members)
                for suffix in _RATE_SUFFIXES:
                    rate = totals[suffix] if single else group_sum(members, suffix) / names
                    fields.append(Field.floating(_ITEM_PREFIX + suffix, rate))
            records.append(self._item_record(name, tags, item, fields, context))
        return records

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    def get_timer_records(
        self, name: str, tags: TagSource, unit: str | None, value: TimerValue, context: ConversionContext
    ) -> list[Record]:
        _require(value)
        fields = [
            Field.integer("Active Sessions", value.active_sessions),
            Field.integer("Total Time", value.total_time),
            Field.integer("Count", value.rate.count),
            *_rate_fields(value.rate),
            *_histogram_fields(value.histogram),
        ]
        records = []
        if self.split_timer_items:
            items = self._meter_set_items(value.rate)
            records.extend(self._meter_item_records(name, tags, value.rate, items, context))
        records.append(self.get_record(name, tags, fields, context))
        return records

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def get_event_records(
        self, name: str, tags: TagSource, value: EventValue, context: ConversionContext
    ) -> list[Record]:
        _require(value)
        return [
            self.get_record(name, tags, self._event_fields(event), context, timestamp=event.timestamp)
            for event in value.events
        ]

    def _event_fields(self, event: EventDetails) -> list[Field]:
        if not event.fields:
            return [Field.string("timestamp", event.timestamp.isoformat())]
        fields = []
        for key, raw in event.fields.items():
            if self.event_fields_as_strings or raw is None:
                fields.append(Field.string(key, "" if raw is None else str(raw)))
                continue
            try:
                fields.append(Field(key, raw))
            except TypeError:
                logger.debug("[InfluxMetrics] Event field %r stored as string: %s", key, type(raw).__name__)
                fields.append(Field.string(key, str(raw)))
        return fields

    # ------------------------------------------------------------------
    # Health checks
    # ------------------------------------------------------------------

    def get_health_records(self, status: HealthStatus, context: ConversionContext) -> list[Record]:
        """One record per health check result."""
        _require(status)
        records = []
        for result in status.results:
            name_tags = parse_health_check_name(result.name)
            fields = [
                Field.boolean("IsHealthy", result.is_healthy),
                Field.string("Message", result.message),
            ]
            # The name tag stays first but its value beats global and declared tags.
            tags = join_tags(None, name_tags[:1], context.global_tags, result.tags, name_tags)
            records.append(Record(HEALTH_CHECKS_MEASUREMENT, fields, tags, context.timestamp))
        return records

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def get_record(
        self,
        name: str,
        tags: TagSource,
        fields: Iterable[Field],
        context: ConversionContext,
        *,
        item_name: str | None = None,
        timestamp: datetime | None = None,
    ) -> Record:
        """Build a record stamped with the context timestamp unless one is given.

        Global tags go first so call-site tags can override them.
        """
        joined = join_tags(item_name, context.global_tags, tags)
        return Record(name, fields, joined, timestamp if timestamp is not None else context.timestamp)

    def _item_record(
        self,
        name: str,
        tags: TagSource,
        item: SetItem,
        fields: list[Field],
        context: ConversionContext,
    ) -> Record:
        joined = join_tags(None, context.global_tags, tags, item.tags)
        return Record(name, fields, joined, context.timestamp)
