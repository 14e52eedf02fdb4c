from __future__ import annotations

from collections.abc import Sequence

from ..compare.ranker import SummaryStatus

STATUS_GLYPHS = {
    SummaryStatus.FLAT: "➡️",
    SummaryStatus.GOOD: "✅",
    SummaryStatus.BAD: "❌",
}


def fmt_value(value: float, unit: str) -> str:
    return f"{value:.2f} {unit}".rstrip()


def fmt_pct(value: float) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.2f}%"


def text_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    widths = [len(h) for h in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))
    line = "  ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    out = [line.rstrip(), "  ".join("-" * w for w in widths)]
    for row in rows:
        out.append("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
    return out


def md_cell(text: str) -> str:
    return " ".join(text.splitlines()).replace("|", "\\|")


def markdown_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    out = ["| " + " | ".join(map(md_cell, headers)) + " |", "|" + "|".join("---" for _ in headers) + "|"]
    out.extend("| " + " | ".join(map(md_cell, row)) + " |" for row in rows)
    return out
