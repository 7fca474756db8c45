"""
Example: one reporting cycle printed to the console.

    pip install -e .
    python examples/console_report.py
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from influx_metrics import (
    CounterItem,
    CounterSource,
    CounterValue,
    GaugeSource,
    HealthCheckResult,
    HealthStatus,
    InfluxConfig,
    InfluxReport,
    MetricsData,
)

logging.basicConfig(level=logging.DEBUG)


def main() -> None:
    config = InfluxConfig.from_uri(
        "http://localhost:8086/?db=metrics&precision=s",
        global_tags={"host": "web-1"},
    )
    report = InfluxReport(config)

    data = MetricsData(
        context="Checkout",
        timestamp=datetime.now(timezone.utc),
        gauges=[GaugeSource(name="Queue Depth", value=12.5)],
        counters=[
            CounterSource(
                name="Orders",
                tags={"region": "eu"},
                value=CounterValue(
                    count=4,
                    items=[
                        CounterItem(item="card,method=card", count=3),
                        CounterItem(item="voucher,method=voucher", count=1),
                    ],
                ),
            )
        ],
    )
    health = HealthStatus(
        results=[HealthCheckResult(name="Database", is_healthy=True, message="ok")]
    )

    report.run_report(data, health)


if __name__ == "__main__":
    main()
