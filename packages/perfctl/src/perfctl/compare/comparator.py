"""Per-metric deltas between a current snapshot and its baselines.

Everything here is pure: the same snapshots always give the same tuple of
results, and nothing is filtered. Ranking and thresholds live in `ranker`.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..core.errors import MetricMissingError
from ..metrics.catalog import DEFAULT_CATALOG, MetricDefinition
from ..metrics.snapshot import Snapshot, read_metric


class Classification(str, Enum):
    IMPROVEMENT = "improvement"
    DEGRADATION = "degradation"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class ComparisonResult:
    metric_key: str
    display_name: str
    unit: str
    current_value: float
    baseline_value: float
    baseline_identity: str
    absolute_delta: float
    percent_delta: float
    classification: Classification

    @property
    def magnitude(self) -> float:
        return abs(self.percent_delta)

    def to_payload(self) -> dict[str, object]:
        return {
            "metric": self.metric_key,
            "display_name": self.display_name,
            "unit": self.unit,
            "current": self.current_value,
            "baseline": self.baseline_value,
            "baseline_name": self.baseline_identity,
            "absolute_delta": self.absolute_delta,
            "percent_delta": self.percent_delta,
            "classification": self.classification.value,
        }


def percent_change(current: float, baseline: float) -> float:
    """Relative change in percent; 0 when the baseline is 0 or the quotient overflows."""
    if baseline == 0:
        return 0.0
    change = (current - baseline) / baseline * 100.0
    return change if math.isfinite(change) else 0.0


def classify(delta: float, lower_is_better: bool) -> Classification:
    if delta == 0:
        return Classification.NEUTRAL
    if (delta < 0) == lower_is_better:
        return Classification.IMPROVEMENT
    return Classification.DEGRADATION


def compare_metric(definition: MetricDefinition, current: Snapshot, baseline: Snapshot) -> ComparisonResult | None:
    try:
        current_value = read_metric(current, definition)
        baseline_value = read_metric(baseline, definition)
    except MetricMissingError:
        return None
    delta = current_value - baseline_value
    if not math.isfinite(delta):
        return None
    return ComparisonResult(
        metric_key=definition.key,
        display_name=definition.display_name,
        unit=definition.unit,
        current_value=current_value,
        baseline_value=baseline_value,
        baseline_identity=baseline.name,
        absolute_delta=delta,
        percent_delta=percent_change(current_value, baseline_value),
        classification=classify(delta, definition.lower_is_better),
    )


def compare_snapshots(
    current: Snapshot,
    baselines: Sequence[Snapshot],
    catalog: Sequence[MetricDefinition] = DEFAULT_CATALOG,
) -> tuple[ComparisonResult, ...]:
    results: list[ComparisonResult] = []
    for definition in catalog:
        for baseline in baselines:
            result = compare_metric(definition, current, baseline)
            if result is not None:
                results.append(result)
    return tuple(results)
