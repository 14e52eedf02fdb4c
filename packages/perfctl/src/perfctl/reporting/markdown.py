from __future__ import annotations

from collections.abc import Sequence

from ..compare.comparator import ComparisonResult
from .document import ComparisonReport
from .formatting import STATUS_GLYPHS, fmt_pct, fmt_value, markdown_table


def _section(title: str, rows: Sequence[ComparisonResult], empty: str, marker: str) -> list[str]:
    lines = [f"## {title}", ""]
    if not rows:
        return lines + [empty, ""]
    for idx, row in enumerate(rows, start=1):
        lines.extend(
            [
                f"### {idx}. {row.display_name}",
                "",
                f"- **Current**: {fmt_value(row.current_value, row.unit)}",
                f"- **Baseline**: {fmt_value(row.baseline_value, row.unit)} ({row.baseline_identity})",
                f"- **Change**: {fmt_pct(row.percent_delta)} {marker}",
                "",
            ]
        )
    return lines


def render_markdown(report: ComparisonReport) -> str:
    k = report.settings.top_k
    gate = report.gate
    lines = [
        "# Performance Comparison Report",
        "",
        f"**Client**: {report.identity.client}",
        f"**Test**: {report.identity.test}",
        f"**Date**: {report.generated_at.isoformat()}",
        f"**Current Result**: {report.baseline_set.current.name}",
        f"**Gate**: {gate.status} (fail threshold {gate.threshold:g}%)",
        "",
        "## Baselines Compared",
        "",
    ]
    lines.extend(f"{i}. {b.name}" for i, b in enumerate(report.baseline_set.baselines, start=1))
    lines.append("")
    lines.extend(
        _section(f"Top {k} Improvements", report.ranking.improvements, "No significant improvements detected.", "✅")
    )
    lines.extend(
        _section(f"Top {k} Degradations", report.ranking.degradations, "No significant degradations detected. ✅", "⚠️")
    )
    lines.extend([f"## Detailed Comparison (vs {report.ranking.summary_baseline})", ""])
    lines.extend(
        markdown_table(
            ("Metric", "Current", "Baseline", "Change", "Status"),
            [
                (
                    row.result.display_name,
                    fmt_value(row.result.current_value, row.result.unit),
                    fmt_value(row.result.baseline_value, row.result.unit),
                    fmt_pct(row.result.percent_delta),
                    STATUS_GLYPHS[row.status],
                )
                for row in report.ranking.summary
            ],
        )
    )
    if gate.regressions:
        lines.extend(["", "## Regressions", ""])
        lines.extend(f"- {r.display_name}: {fmt_pct(r.percent_delta)} vs {r.baseline_identity}" for r in gate.regressions)
    return "\n".join(lines) + "\n"
