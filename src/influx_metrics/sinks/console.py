"""Console writer — prints line protocol to stdout."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Union

from ..model.line_protocol import Precision
from .types import Writer

if TYPE_CHECKING:
    from ..model.types import Batch

# A fixed precision, or a callable asked for it at write time.
PrecisionSource = Union[Precision, Callable[[], Precision]]


class ConsoleWriter(Writer):
    """Prints each batch as newline-delimited line protocol."""

    def __init__(self, precision: PrecisionSource = Precision.MILLISECONDS) -> None:
        self._precision = precision

    @property
    def precision(self) -> Precision:
        if callable(self._precision):
            return self._precision()
        return self._precision

    def write(self, batch: Batch) -> None:
        if len(batch):
            print(batch.to_line_protocol(self.precision))


def create_console_writer(precision: PrecisionSource = Precision.MILLISECONDS) -> Writer:
    return ConsoleWriter(precision=precision)
