"""CLI constants and registration tables."""

from __future__ import annotations

CONFIGURE_HOOKS: tuple[tuple[str, str], ...] = (
    ("perfctl.commands.compare.command", "configure_compare_parser"),
    ("perfctl.commands.diff.command", "configure_diff_parser"),
    ("perfctl.commands.trend.command", "configure_trend_parser"),
)

RUN_HOOKS: dict[str, tuple[str, str]] = {
    "compare": ("perfctl.commands.compare.command", "run_compare_command"),
    "diff": ("perfctl.commands.diff.command", "run_diff_command"),
    "trend": ("perfctl.commands.trend.command", "run_trend_command"),
}
