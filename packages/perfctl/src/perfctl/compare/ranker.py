from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .comparator import Classification, ComparisonResult

SIGNIFICANCE_FLOOR_PCT = 1.0
SUMMARY_FLAT_PCT = 5.0
DEFAULT_TOP_K = 3


class SummaryStatus(str, Enum):
    FLAT = "flat"
    GOOD = "good"
    BAD = "bad"


@dataclass(frozen=True)
class SummaryRow:
    result: ComparisonResult
    status: SummaryStatus


@dataclass(frozen=True)
class Ranking:
    improvements: tuple[ComparisonResult, ...]
    degradations: tuple[ComparisonResult, ...]
    summary: tuple[SummaryRow, ...]
    summary_baseline: str


def top_changes(
    results: Sequence[ComparisonResult],
    classification: Classification,
    k: int = DEFAULT_TOP_K,
    floor: float = SIGNIFICANCE_FLOOR_PCT,
) -> tuple[ComparisonResult, ...]:
    """Largest changes of one kind, strictly above `floor` percent, at most `k`."""
    picked = [r for r in results if r.classification is classification and r.magnitude > floor]
    picked.sort(key=lambda r: r.magnitude, reverse=True)
    return tuple(picked[: max(k, 0)])


def summary_status(result: ComparisonResult, flat_threshold: float = SUMMARY_FLAT_PCT) -> SummaryStatus:
    if result.magnitude <= flat_threshold:
        return SummaryStatus.FLAT
    if result.classification is Classification.IMPROVEMENT:
        return SummaryStatus.GOOD
    return SummaryStatus.BAD


def build_summary(
    results: Sequence[ComparisonResult],
    baseline_name: str,
    flat_threshold: float = SUMMARY_FLAT_PCT,
) -> tuple[SummaryRow, ...]:
    return tuple(
        SummaryRow(result=r, status=summary_status(r, flat_threshold))
        for r in results
        if r.baseline_identity == baseline_name
    )


def rank(
    results: Sequence[ComparisonResult],
    most_recent_baseline: str,
    k: int = DEFAULT_TOP_K,
    floor: float = SIGNIFICANCE_FLOOR_PCT,
    flat_threshold: float = SUMMARY_FLAT_PCT,
) -> Ranking:
    return Ranking(
        improvements=top_changes(results, Classification.IMPROVEMENT, k, floor),
        degradations=top_changes(results, Classification.DEGRADATION, k, floor),
        summary=build_summary(results, most_recent_baseline, flat_threshold),
        summary_baseline=most_recent_baseline,
    )
