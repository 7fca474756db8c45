import pytest

from influx_metrics import Batch, Writer


class RecordingWriter(Writer):
    """Keeps every batch it is given."""

    def __init__(self) -> None:
        self.batches: list[Batch] = []
        self.closed = False

    def write(self, batch: Batch) -> None:
        self.batches.append(batch)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()
