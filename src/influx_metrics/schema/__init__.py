"""
Snapshot schema — the metric values a collector hands over at report time.

The collector itself (accumulation, sampling, health check registration) is
not part of this package; only the shape of its output is.
"""

from .data import (
    CounterSource,
    EventSource,
    GaugeSource,
    HistogramSource,
    MeterSource,
    MetricsData,
    TimerSource,
)
from .health import HealthCheckResult, HealthStatus
from .values import (
    CounterItem,
    CounterValue,
    EventDetails,
    EventValue,
    HistogramValue,
    MeterItem,
    MeterValue,
    TimerValue,
)

__all__ = [
    # values
    "CounterItem",
    "CounterValue",
    "EventDetails",
    "EventValue",
    "HistogramValue",
    "MeterItem",
    "MeterValue",
    "TimerValue",
    # health
    "HealthCheckResult",
    "HealthStatus",
    # snapshot
    "CounterSource",
    "EventSource",
    "GaugeSource",
    "HistogramSource",
    "MeterSource",
    "MetricsData",
    "TimerSource",
]
