from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..compare.comparator import ComparisonResult
from ..compare.ranker import SummaryRow
from ..compare.trend import MetricTrend
from ..gate.exit_policy import GateDecision
from .document import ComparisonReport
from .formatting import STATUS_GLYPHS, fmt_pct, fmt_value, text_table

RULE = "=" * 70


def _change_block(title: str, rows: Sequence[ComparisonResult], empty: str) -> list[str]:
    lines = [RULE, title, RULE]
    if not rows:
        lines.append(f"   {empty}")
        return lines
    for idx, row in enumerate(rows, start=1):
        lines.extend(
            [
                "",
                f"{idx}. {row.display_name}",
                f"   Current:  {fmt_value(row.current_value, row.unit)}",
                f"   Baseline: {fmt_value(row.baseline_value, row.unit)} ({row.baseline_identity})",
                f"   Change:   {fmt_pct(row.percent_delta)}",
            ]
        )
    return lines


def summary_lines(rows: Sequence[SummaryRow]) -> list[str]:
    if not rows:
        return ["   No metrics present in both snapshots"]
    return text_table(
        ("Metric", "Current", "Baseline", "Change", "Status"),
        [
            (
                row.result.display_name,
                fmt_value(row.result.current_value, row.result.unit),
                fmt_value(row.result.baseline_value, row.result.unit),
                fmt_pct(row.result.percent_delta),
                f"{STATUS_GLYPHS[row.status]} {row.status.value}",
            )
            for row in rows
        ],
    )


def gate_lines(gate: GateDecision) -> list[str]:
    if gate.passed:
        return ["Performance comparison complete: no degradation above the fail threshold"]
    lines = [f"REGRESSION DETECTED: degradation above {gate.threshold:g}%"]
    lines.extend(
        f"  - {r.display_name}: {fmt_pct(r.percent_delta)} vs {r.baseline_identity}" for r in gate.regressions
    )
    return lines


def render_console(report: ComparisonReport, written: Path | None = None) -> str:
    k = report.settings.top_k
    lines = [
        "Auto-compare: analyzing performance trends",
        f"   Client:  {report.identity.client}",
        f"   Test:    {report.identity.test}",
        f"   Current: {report.baseline_set.current.name}",
    ]
    lines.extend(f"   Baseline {i}: {b.name}" for i, b in enumerate(report.baseline_set.baselines, start=1))
    lines.append("")
    lines.extend(
        _change_block(f"TOP {k} IMPROVEMENTS", report.ranking.improvements, "No significant improvements detected")
    )
    lines.append("")
    lines.extend(
        _change_block(f"TOP {k} DEGRADATIONS", report.ranking.degradations, "No significant degradations detected")
    )
    lines.extend(["", RULE, f"DETAILED COMPARISON (vs {report.ranking.summary_baseline})", RULE])
    lines.extend(summary_lines(report.ranking.summary))
    if written is not None:
        lines.extend(["", f"Comparison report saved: {written}"])
    lines.append("")
    lines.extend(gate_lines(report.gate))
    return "\n".join(lines)


def render_diff(baseline: str, current: str, rows: Sequence[SummaryRow], gate: GateDecision) -> str:
    lines = [
        "Comparing results",
        f"   Baseline:  {baseline}",
        f"   Current:   {current}",
        f"   Threshold: {gate.threshold:g}%",
        "",
    ]
    lines.extend(summary_lines(rows))
    lines.append("")
    lines.extend(gate_lines(gate))
    return "\n".join(lines)


def render_trends(label: str, trends: Sequence[MetricTrend], count: int) -> str:
    lines = [f"Trend analysis: {label}", f"   Snapshots analyzed: {count}", ""]
    rows = []
    for t in trends:
        latest = "n/a" if t.latest is None else fmt_value(t.latest, t.unit)
        change = "n/a" if t.change_pct is None else fmt_pct(t.change_pct)
        rows.append((t.display_name, t.trend.value, latest, change, str(len(t.values))))
    lines.extend(text_table(("Metric", "Trend", "Latest", "Change", "Samples"), rows))
    return "\n".join(lines)
