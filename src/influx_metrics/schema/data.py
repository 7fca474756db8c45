"""A full metrics snapshot for one context and its children."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .values import (
    CounterValue,
    EventValue,
    HistogramValue,
    MeterValue,
    TimerValue,
    _Base,
)


class _MetricSource(_Base):
    name: str
    unit: str = ""
    tags: dict[str, str] = Field(default_factory=dict)


class GaugeSource(_MetricSource):
    value: float


class CounterSource(_MetricSource):
    value: CounterValue


class MeterSource(_MetricSource):
    value: MeterValue


class HistogramSource(_MetricSource):
    value: HistogramValue


class TimerSource(_MetricSource):
    value: TimerValue


class EventSource(_MetricSource):
    value: EventValue


class MetricsData(_Base):
    context: str
    timestamp: datetime
    gauges: list[GaugeSource] = Field(default_factory=list)
    counters: list[CounterSource] = Field(default_factory=list)
    meters: list[MeterSource] = Field(default_factory=list)
    histograms: list[HistogramSource] = Field(default_factory=list)
    timers: list[TimerSource] = Field(default_factory=list)
    events: list[EventSource] = Field(default_factory=list)
    child_metrics: list[MetricsData] = Field(default_factory=list)


MetricsData.model_rebuild()
