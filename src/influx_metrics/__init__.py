"""influx-metrics — converts metric snapshots into InfluxDB line protocol batches."""

from .adapters import (
    HEALTH_CHECKS_MEASUREMENT,
    ConversionContext,
    Converter,
    Formatter,
    ItemLabel,
    join_tags,
    parse_health_check_name,
    parse_item_label,
    to_tags,
)
from .config import DEFAULT_PORT_HTTP, DEFAULT_PRECISION, InfluxConfig, resolve_precision
from .model import (
    Batch,
    Field,
    FieldKind,
    Precision,
    Record,
    Tag,
    escape,
    format_float,
    format_timestamp,
    unescape,
)
from .report import InfluxReport
from .schema import (
    CounterItem,
    CounterSource,
    CounterValue,
    EventDetails,
    EventSource,
    EventValue,
    GaugeSource,
    HealthCheckResult,
    HealthStatus,
    HistogramSource,
    HistogramValue,
    MeterItem,
    MeterSource,
    MeterValue,
    MetricsData,
    TimerSource,
    TimerValue,
)
from .sinks import ConsoleWriter, Writer, WriterBus, create_console_writer

__all__ = [
    # model
    "Batch",
    "Field",
    "FieldKind",
    "Precision",
    "Record",
    "Tag",
    "escape",
    "format_float",
    "format_timestamp",
    "unescape",
    # adapters
    "ConversionContext",
    "Converter",
    "Formatter",
    "HEALTH_CHECKS_MEASUREMENT",
    "ItemLabel",
    "join_tags",
    "parse_health_check_name",
    "parse_item_label",
    "to_tags",
    # config / report
    "DEFAULT_PORT_HTTP",
    "DEFAULT_PRECISION",
    "InfluxConfig",
    "InfluxReport",
    "resolve_precision",
    # schema
    "CounterItem",
    "CounterSource",
    "CounterValue",
    "EventDetails",
    "EventSource",
    "EventValue",
    "GaugeSource",
    "HealthCheckResult",
    "HealthStatus",
    "HistogramSource",
    "HistogramValue",
    "MeterItem",
    "MeterSource",
    "MeterValue",
    "MetricsData",
    "TimerSource",
    "TimerValue",
    # sinks
    "ConsoleWriter",
    "Writer",
    "WriterBus",
    "create_console_writer",
]
