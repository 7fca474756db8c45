from .bus import WriterBus
from .console import ConsoleWriter, create_console_writer
from .types import Writer

__all__ = ["ConsoleWriter", "Writer", "WriterBus", "create_console_writer"]
