"""Writer protocol — the strategy that ships a finished batch somewhere."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.types import Batch


class Writer(ABC):
    """A writer receives formatted batches and delivers them.

    Only ``write`` is mandatory; ``flush`` and ``close`` are no-ops by default.
    """

    @abstractmethod
    def write(self, batch: Batch) -> None:
        """Write one batch of records."""

    def flush(self) -> None:
        """Deliver anything still buffered."""

    def close(self) -> None:
        """Flush and release resources."""
