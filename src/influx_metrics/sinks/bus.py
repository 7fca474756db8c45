"""WriterBus — fans one batch out to several writers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .types import Writer

if TYPE_CHECKING:
    from ..model.types import Batch

logger = logging.getLogger("influx_metrics")


class WriterBus(Writer):
    """Delivers every batch to all registered writers.

    A failing writer is logged and skipped; the remaining writers still
    receive the batch.
    """

    def __init__(self, *writers: Writer) -> None:
        self._writers: list[Writer] = list(writers)
        self._closed = False

    def add(self, *writers: Writer) -> None:
        self._writers.extend(writers)

    def write(self, batch: Batch) -> None:
        if self._closed:
            return
        for writer in self._writers:
            try:
                writer.write(batch)
            except Exception as exc:
                logger.error("[InfluxMetrics] Writer error in %s: %s", type(writer).__name__, exc)

    def flush(self) -> None:
        for writer in self._writers:
            try:
                writer.flush()
            except Exception as exc:
                logger.error("[InfluxMetrics] Writer flush error in %s: %s", type(writer).__name__, exc)

    def close(self) -> None:
        self._closed = True
        for writer in self._writers:
            try:
                writer.close()
            except Exception as exc:
                logger.error("[InfluxMetrics] Writer close error in %s: %s", type(writer).__name__, exc)
