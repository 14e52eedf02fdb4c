from __future__ import annotations

import argparse

from ...compare.comparator import compare_snapshots
from ...compare.ranker import build_summary
from ...core.context import RunContext
from ...core.errors import ConfigurationError
from ...core.fs import resolve_under
from ...core.runtime.logging import log_event
from ...core.runtime.serialize import dumps_json
from ...gate.exit_policy import FAIL_THRESHOLD_PCT, evaluate_gate
from ...metrics.catalog import DEFAULT_CATALOG
from ...metrics.snapshot import load_snapshot
from ...reporting.console import render_diff


def configure_diff_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("diff", help="compare two snapshot files directly")
    p.add_argument("--baseline", help="baseline snapshot path")
    p.add_argument("--current", help="current snapshot path")
    p.add_argument(
        "--threshold",
        type=float,
        default=FAIL_THRESHOLD_PCT,
        help="allowed degradation in percent before failing (default: %(default)s)",
    )
    p.add_argument("--json", action="store_true", help="emit JSON output")


def run_diff_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    if not ns.baseline or not ns.current:
        raise ConfigurationError("--baseline and --current arguments are required")
    if ns.threshold < 0:
        raise ConfigurationError(f"--threshold must not be negative, got {ns.threshold}")
    baseline = load_snapshot(resolve_under(ctx.cwd, ns.baseline))
    current = load_snapshot(resolve_under(ctx.cwd, ns.current))
    results = compare_snapshots(current, [baseline], DEFAULT_CATALOG)
    rows = build_summary(results, baseline.name)
    gate = evaluate_gate([row.result for row in rows], ns.threshold)
    log_event(ctx, "info", "diff", "done", baseline=baseline.name, current=current.name, status=gate.status)
    if ctx.as_json or ns.json:
        payload = {
            "schema_version": 1,
            "tool": "perfctl",
            "status": gate.status,
            "baseline": baseline.name,
            "current": current.name,
            "rows": [{**row.result.to_payload(), "status": row.status.value} for row in rows],
            "gate": gate.to_payload(),
        }
        print(dumps_json(payload, pretty=not ctx.as_json))
    else:
        print(render_diff(baseline.name, current.name, rows, gate))
    return gate.exit_code
