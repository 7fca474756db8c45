"""One reporting cycle: snapshot in, formatted batch out."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Union

from .adapters.converter import ConversionContext
from .config import InfluxConfig, resolve_precision
from .model.line_protocol import Precision
from .model.types import Batch, Record
from .schema.data import MetricsData
from .schema.health import HealthStatus

logger = logging.getLogger("influx_metrics")

HealthStatusSource = Union[HealthStatus, Callable[[], HealthStatus], None]


class InfluxReport:
    """Converts a metrics snapshot with the configured strategies and writes it.

    Scheduling is up to the caller: each ``run_report`` call is one cycle
    with its own :class:`ConversionContext`.
    """

    def __init__(self, config: InfluxConfig) -> None:
        self.config = config

    @property
    def precision(self) -> Precision:
        return resolve_precision(self.config)

    def run_report(self, metrics_data: MetricsData, health_status: HealthStatusSource = None) -> Batch:
        if metrics_data is None:
            raise ValueError("metrics_data must not be None")

        context = ConversionContext.create(metrics_data.timestamp, self.config.global_tags)
        batch = Batch()
        self._report_context(metrics_data, [], context, batch)

        if not self.config.disable_sending_health_report and health_status is not None:
            status = health_status() if callable(health_status) else health_status
            self._add(batch, self.config.converter.get_health_records(status, context))

        if not len(batch):
            logger.debug("[InfluxMetrics] Nothing to report for context %r", metrics_data.context)
            return batch

        self.config.writer.write(batch)
        logger.debug("[InfluxMetrics] Wrote %d records for context %r", len(batch), metrics_data.context)
        return batch

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _report_context(
        self,
        data: MetricsData,
        context_stack: list[str],
        context: ConversionContext,
        batch: Batch,
    ) -> None:
        formatter = self.config.formatter
        converter = self.config.converter
        context_name = formatter.format_context_name(context_stack, data.context)

        def name_of(source, metric_type: str) -> str:
            return formatter.format_metric_name(context_name, source.name, metric_type)

        for gauge in data.gauges:
            records = converter.get_gauge_records(
                name_of(gauge, "gauge"), gauge.tags, gauge.unit, gauge.value, context
            )
            self._add(batch, records)
        for counter in data.counters:
            records = converter.get_counter_records(
                name_of(counter, "counter"), counter.tags, counter.unit, counter.value, context
            )
            self._add(batch, records)
        for meter in data.meters:
            records = converter.get_meter_records(
                name_of(meter, "meter"), meter.tags, meter.unit, meter.value, context
            )
            self._add(batch, records)
        for hist in data.histograms:
            records = converter.get_histogram_records(
                name_of(hist, "histogram"), hist.tags, hist.unit, hist.value, context
            )
            self._add(batch, records)
        for timer in data.timers:
            records = converter.get_timer_records(
                name_of(timer, "timer"), timer.tags, timer.unit, timer.value, context
            )
            self._add(batch, records)
        for event in data.events:
            records = converter.get_event_records(
                name_of(event, "event"), event.tags, event.value, context
            )
            self._add(batch, records)

        for child in data.child_metrics:
            self._report_context(child, [*context_stack, data.context], context, batch)

    def _add(self, batch: Batch, records: list[Record]) -> None:
        formatter = self.config.formatter
        batch.extend(formatter.format_record(r) for r in records)
