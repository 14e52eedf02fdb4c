"""Direction of each catalog metric across the stored history."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..core.errors import MetricMissingError
from ..metrics.catalog import DEFAULT_CATALOG, MetricDefinition
from ..metrics.snapshot import Snapshot, read_metric

TREND_STABLE_PCT = 5.0
RECENT_WINDOW = 3


class Trend(str, Enum):
    IMPROVING = "improving"
    DEGRADING = "degrading"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class MetricTrend:
    metric_key: str
    display_name: str
    unit: str
    lower_is_better: bool
    values: tuple[float, ...]
    change_pct: float | None
    trend: Trend

    @property
    def latest(self) -> float | None:
        return self.values[-1] if self.values else None

    def to_payload(self) -> dict[str, object]:
        return {
            "metric": self.metric_key,
            "display_name": self.display_name,
            "unit": self.unit,
            "lower_is_better": self.lower_is_better,
            "values": list(self.values),
            "change_pct": self.change_pct,
            "trend": self.trend.value,
        }


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def classify_trend(
    values: Sequence[float],
    lower_is_better: bool,
    stable_threshold: float = TREND_STABLE_PCT,
) -> tuple[Trend, float | None]:
    """Compare the mean of the last three values with the mean of the older ones."""
    if len(values) < 2:
        return Trend.INSUFFICIENT_DATA, None
    recent = values[-RECENT_WINDOW:]
    older = values[:-RECENT_WINDOW]
    if not older:
        return Trend.INSUFFICIENT_DATA, None
    older_mean = _mean(older)
    change = 0.0 if older_mean == 0 else (_mean(recent) - older_mean) / older_mean * 100.0
    if not math.isfinite(change):
        change = 0.0
    if abs(change) < stable_threshold:
        return Trend.STABLE, change
    rising = change > 0
    if rising == lower_is_better:
        return Trend.DEGRADING, change
    return Trend.IMPROVING, change


def analyze_trends(
    snapshots: Sequence[Snapshot],
    catalog: Sequence[MetricDefinition] = DEFAULT_CATALOG,
    stable_threshold: float = TREND_STABLE_PCT,
) -> tuple[MetricTrend, ...]:
    """`snapshots` must be ordered oldest first."""
    out: list[MetricTrend] = []
    for definition in catalog:
        series: list[float] = []
        for snapshot in snapshots:
            try:
                series.append(read_metric(snapshot, definition))
            except MetricMissingError:
                continue
        trend, change = classify_trend(series, definition.lower_is_better, stable_threshold)
        out.append(
            MetricTrend(
                metric_key=definition.key,
                display_name=definition.display_name,
                unit=definition.unit,
                lower_is_better=definition.lower_is_better,
                values=tuple(series),
                change_pct=change,
                trend=trend,
            )
        )
    return tuple(out)
