from __future__ import annotations

from .console import render_console, render_diff, render_trends
from .document import ComparisonReport, build_report_payload
from .markdown import render_markdown
from .writer import report_path, write_report

__all__ = [
    "ComparisonReport",
    "build_report_payload",
    "render_console",
    "render_diff",
    "render_markdown",
    "render_trends",
    "report_path",
    "write_report",
]
