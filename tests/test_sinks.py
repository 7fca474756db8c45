import logging
from datetime import datetime, timezone

import pytest

from influx_metrics import Batch, ConsoleWriter, Field, Precision, Record, Writer, WriterBus, create_console_writer


def _batch() -> Batch:
    return Batch([Record("cpu", [Field("value", 0.5)], timestamp=None), Record("mem", [Field("used", 10)])])


class _FailingWriter(Writer):
    def write(self, batch: Batch) -> None:
        raise RuntimeError("connection refused")


def test_console_writer_prints_line_protocol(capsys: pytest.CaptureFixture[str]) -> None:
    ConsoleWriter().write(_batch())
    assert capsys.readouterr().out == "cpu value=0.5\nmem used=10i\n"


def test_console_writer_skips_empty_batches(capsys: pytest.CaptureFixture[str]) -> None:
    create_console_writer(Precision.SECONDS).write(Batch())
    assert capsys.readouterr().out == ""


def test_writer_bus_fans_out(writer) -> None:
    other = type(writer)()
    bus = WriterBus(writer)
    bus.add(other)
    batch = _batch()
    bus.write(batch)
    assert writer.batches == [batch]
    assert other.batches == [batch]


def test_writer_bus_isolates_failures(writer, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="influx_metrics")
    bus = WriterBus(_FailingWriter(), writer)
    bus.write(_batch())
    assert len(writer.batches) == 1
    assert "Writer error in _FailingWriter: connection refused" in caplog.text


def test_writer_bus_close(writer) -> None:
    bus = WriterBus(writer)
    bus.close()
    assert writer.closed
    bus.write(_batch())
    assert writer.batches == []


def test_console_writer_asks_for_precision_on_each_write(capsys: pytest.CaptureFixture[str]) -> None:
    current = [Precision.SECONDS]
    console = ConsoleWriter(precision=lambda: current[0])
    batch = Batch([Record("m", [Field("v", 1)], timestamp=datetime(2016, 6, 1, tzinfo=timezone.utc))])
    console.write(batch)
    current[0] = Precision.MILLISECONDS
    console.write(batch)
    assert capsys.readouterr().out == "m v=1i 1464739200\nm v=1i 1464739200000\n"
