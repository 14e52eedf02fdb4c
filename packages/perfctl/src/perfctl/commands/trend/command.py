from __future__ import annotations

import argparse

from ...compare.trend import analyze_trends
from ...core.context import RunContext
from ...core.errors import NoHistoryError
from ...core.exit_codes import OK
from ...core.runtime.logging import log_event
from ...core.runtime.serialize import dumps_json
from ...metrics.catalog import DEFAULT_CATALOG
from ...reporting.console import render_trends
from ...store.results import ResultStore, TestIdentity
from ..common import settings_from_namespace


def configure_trend_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("trend", help="show how each metric moved across the stored history")
    p.add_argument("--client", help="client name")
    p.add_argument("--test", help="test name; a .ts/.js suffix is ignored")
    p.add_argument("--limit", type=int, help="number of most recent snapshots to analyze")
    p.add_argument("--stable-threshold", type=float, help="|change|%% below which a metric is stable")
    p.add_argument("--json", action="store_true", help="emit JSON output")


def run_trend_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    identity = TestIdentity.from_args(ns.client, ns.test)
    settings = settings_from_namespace(ctx, ns, trend_limit=ns.limit, trend_stable_pct=ns.stable_threshold)
    store = ResultStore(settings.reports_root, settings.snapshot_glob)
    as_json = ctx.as_json or ns.json
    try:
        history = store.list_snapshots(identity)
    except NoHistoryError as exc:
        if as_json:
            print(dumps_json({"schema_version": 1, "tool": "perfctl", "status": "skipped", "message": str(exc)}))
        else:
            print(f"No trend analysis performed: {exc}")
        return OK
    window = list(reversed(history[: settings.trend_limit]))
    snapshots = [ref.load() for ref in window]
    trends = analyze_trends(snapshots, DEFAULT_CATALOG, settings.trend_stable_pct)
    log_event(ctx, "info", "trend", "done", identity=str(identity), snapshots=len(snapshots))
    if as_json:
        payload = {
            "schema_version": 1,
            "tool": "perfctl",
            "status": "ok",
            "client": identity.client,
            "test": identity.test,
            "snapshots": [s.name for s in snapshots],
            "trends": [t.to_payload() for t in trends],
        }
        print(dumps_json(payload, pretty=not ctx.as_json))
    else:
        print(render_trends(str(identity), trends, len(snapshots)))
    return OK
