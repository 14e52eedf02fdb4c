"""Comparable k6 metrics and their directionality.

Every metric the engine knows about is declared here exactly once. A row names
where the value lives inside a snapshot (`metric` plus optional `statistic`),
how to display it, and whether a smaller value is an improvement.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.errors import ConfigurationError


@dataclass(frozen=True)
class MetricDefinition:
    key: str
    display_name: str
    metric: str
    statistic: str | None
    unit: str
    lower_is_better: bool
    scale: float = 1.0

    @property
    def accessor_path(self) -> str:
        return self.metric if self.statistic is None else f"{self.metric}.{self.statistic}"

    def to_payload(self) -> dict[str, object]:
        return {
            "key": self.key,
            "display_name": self.display_name,
            "accessor": self.accessor_path,
            "unit": self.unit,
            "lower_is_better": self.lower_is_better,
            "scale": self.scale,
        }


DEFAULT_CATALOG: tuple[MetricDefinition, ...] = (
    MetricDefinition("http_req_duration.avg", "Response Time (avg)", "http_req_duration", "avg", "ms", True),
    MetricDefinition("http_req_duration.p95", "Response Time (p95)", "http_req_duration", "p(95)", "ms", True),
    MetricDefinition("http_req_duration.p99", "Response Time (p99)", "http_req_duration", "p(99)", "ms", True),
    MetricDefinition("http_reqs.rate", "Throughput", "http_reqs", "rate", "req/s", False),
    MetricDefinition("http_req_failed.rate", "Error Rate", "http_req_failed", "rate", "%", True, scale=100.0),
    MetricDefinition("checks.rate", "Check Pass Rate", "checks", "rate", "%", False, scale=100.0),
    MetricDefinition("iterations.count", "Iterations", "iterations", "count", "", False),
    MetricDefinition("vus.max", "Virtual Users (max)", "vus", "max", "", False),
)


def validate_catalog(catalog: tuple[MetricDefinition, ...]) -> tuple[MetricDefinition, ...]:
    if not catalog:
        raise ConfigurationError("metric catalog is empty")
    seen: set[str] = set()
    for row in catalog:
        if not row.key or not row.display_name or not row.metric:
            raise ConfigurationError(f"metric definition has empty fields: {row!r}")
        if row.key in seen:
            raise ConfigurationError(f"duplicate metric key in catalog: {row.key}")
        seen.add(row.key)
        if not math.isfinite(row.scale) or row.scale == 0:
            raise ConfigurationError(f"{row.key}: scale must be a finite non-zero number, got {row.scale}")
    return catalog


validate_catalog(DEFAULT_CATALOG)
