"""Health check results consumed by the converter."""

from __future__ import annotations

from pydantic import Field

from .values import _Base


class HealthCheckResult(_Base):
    name: str
    is_healthy: bool
    message: str = ""
    tags: dict[str, str] = Field(default_factory=dict)


class HealthStatus(_Base):
    results: list[HealthCheckResult] = Field(default_factory=list)

    @property
    def is_healthy(self) -> bool:
        return all(r.is_healthy for r in self.results)

    @property
    def has_registered_checks(self) -> bool:
        return bool(self.results)
