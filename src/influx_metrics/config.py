"""Reporter configuration."""

from __future__ import annotations

import os
from functools import partial
from urllib.parse import parse_qsl, urlsplit

from .adapters.converter import Converter
from .adapters.formatter import Formatter
from .adapters.tags import TagSource, to_tags
from .model.line_protocol import Precision
from .model.types import Tag
from .sinks.console import ConsoleWriter
from .sinks.types import Writer

DEFAULT_PORT_HTTP = 8086
DEFAULT_PRECISION = Precision.MILLISECONDS

PRECISION_ENV_VAR = "INFLUX_METRICS_PRECISION"


class InfluxConfig:
    """Settings for one InfluxDB reporter.

    Connection settings (``uri``, ``database``, credentials, retention
    policy) are carried for the writer; this package does not open
    connections itself. Unset strategies fall back to ``Converter()``,
    ``Formatter()`` and a ``ConsoleWriter`` that resolves its precision
    through :func:`resolve_precision` on every write.
    """

    def __init__(
        self,
        uri: str | None = None,
        database: str | None = None,
        username: str | None = None,
        password: str | None = None,
        retention_policy: str | None = None,
        precision: Precision | str | None = None,
        global_tags: TagSource = None,
        disable_sending_health_report: bool = False,
        converter: Converter | None = None,
        formatter: Formatter | None = None,
        writer: Writer | None = None,
    ) -> None:
        self.uri = uri
        self.database = database
        self.username = username
        self.password = password
        self.retention_policy = retention_policy
        if precision is not None and not isinstance(precision, Precision):
            precision = Precision.from_short_name(precision)
        self.precision = precision
        self.global_tags: list[Tag] = to_tags(global_tags)
        self.disable_sending_health_report = disable_sending_health_report
        self.converter = converter or Converter()
        self.formatter = formatter or Formatter()
        self.writer = writer or ConsoleWriter(precision=partial(resolve_precision, self))

    @classmethod
    def from_uri(cls, uri: str, **kwargs) -> InfluxConfig:
        """Build a config from a URI such as ``http://host:8086/?db=metrics&precision=s``.

        Recognised query parameters: ``db``, ``rp``, ``u``, ``p`` and
        ``precision``. Empty values are ignored.
        """
        if not uri:
            raise ValueError("uri must not be empty")
        params: dict[str, str] = {}
        for key, value in parse_qsl(urlsplit(uri).query):
            if value:
                params[key.lower()] = value

        precision = params.get("precision")
        return cls(
            uri=uri,
            database=params.get("db"),
            username=params.get("u"),
            password=params.get("p"),
            retention_policy=params.get("rp"),
            precision=Precision.from_short_name(precision) if precision else None,
            **kwargs,
        )

    @property
    def port(self) -> int:
        if self.uri:
            parsed_port = urlsplit(self.uri).port
            if parsed_port:
                return parsed_port
        return DEFAULT_PORT_HTTP


def resolve_precision(config: InfluxConfig | None = None) -> Precision:
    """Explicit precision, then ``INFLUX_METRICS_PRECISION``, then the default."""
    if config is not None and config.precision is not None:
        return config.precision
    from_env = os.environ.get(PRECISION_ENV_VAR)
    if from_env:
        return Precision.from_short_name(from_env)
    return DEFAULT_PRECISION
