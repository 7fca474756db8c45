"""Metric value snapshots consumed by the converter.

These mirror the value objects produced by the metrics collection library at
report time. Field names use camelCase aliases so snapshots can be loaded from
the JSON the collector emits.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Base(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------------------------------------------------------------------------
# Counter
# ---------------------------------------------------------------------------


class CounterItem(_Base):
    item: str = ""
    count: int
    # Share of the counter total in percent; computed from the counts when absent.
    percent: float | None = None


class CounterValue(_Base):
    count: int
    items: list[CounterItem] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Meter
# ---------------------------------------------------------------------------


class MeterValue(_Base):
    count: int
    mean_rate: float = 0.0
    one_minute_rate: float = 0.0
    five_minute_rate: float = 0.0
    fifteen_minute_rate: float = 0.0
    rate_unit: str = "s"
    items: list[MeterItem] = Field(default_factory=list)


class MeterItem(_Base):
    item: str = ""
    value: MeterValue
    percent: float | None = None


MeterValue.model_rebuild()


# ---------------------------------------------------------------------------
# Histogram / Timer
# ---------------------------------------------------------------------------


class HistogramValue(_Base):
    count: int = 0
    last_value: float = 0.0
    min: float = 0.0
    mean: float = 0.0
    max: float = 0.0
    std_dev: float = 0.0
    median: float = 0.0
    sample_size: int = 0
    percentile_75: float = 0.0
    percentile_95: float = 0.0
    percentile_98: float = 0.0
    percentile_99: float = 0.0
    percentile_999: float = 0.0


class TimerValue(_Base):
    rate: MeterValue
    histogram: HistogramValue
    active_sessions: int = 0
    total_time: int = 0


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class EventDetails(_Base):
    timestamp: datetime
    fields: dict[str, Any] = Field(default_factory=dict)


class EventValue(_Base):
    events: list[EventDetails] = Field(default_factory=list)
