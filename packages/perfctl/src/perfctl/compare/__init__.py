from __future__ import annotations

from .baseline import BaselineSelection, BaselineSet, SelectionMode, select_baselines
from .comparator import Classification, ComparisonResult, classify, compare_snapshots, percent_change
from .ranker import Ranking, SummaryRow, SummaryStatus, build_summary, rank, top_changes
from .trend import MetricTrend, Trend, analyze_trends, classify_trend

__all__ = [
    "BaselineSelection",
    "BaselineSet",
    "Classification",
    "ComparisonResult",
    "MetricTrend",
    "Ranking",
    "SelectionMode",
    "SummaryRow",
    "SummaryStatus",
    "Trend",
    "analyze_trends",
    "build_summary",
    "classify",
    "classify_trend",
    "compare_snapshots",
    "percent_change",
    "rank",
    "select_baselines",
    "top_changes",
]
