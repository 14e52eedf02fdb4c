from __future__ import annotations

import argparse

from ...compare.baseline import BaselineSelection, select_baselines
from ...compare.comparator import compare_snapshots
from ...compare.ranker import rank
from ...core.context import RunContext
from ...core.errors import NoHistoryError
from ...core.exit_codes import OK
from ...core.runtime.clock import utc_now
from ...core.runtime.env import getenv_list
from ...core.runtime.logging import log_event
from ...core.runtime.serialize import dumps_json
from ...gate.exit_policy import evaluate_gate
from ...metrics.catalog import DEFAULT_CATALOG
from ...reporting.console import render_console
from ...reporting.document import ComparisonReport, build_report_payload, validate_report_payload
from ...reporting.writer import write_report
from ...store.results import ResultStore, TestIdentity
from ..common import settings_from_namespace, split_names


def configure_compare_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("compare", help="compare the latest snapshot of a test against its history")
    p.add_argument("--client", help="client name (reports/<client>/...)")
    p.add_argument("--test", help="test name; a .ts/.js suffix is ignored")
    p.add_argument(
        "--compare-with",
        action="append",
        metavar="NAME",
        help="explicit baseline file name; repeatable or comma-separated (env: COMPARE_WITH)",
    )
    p.add_argument("--max-history", type=int, help="number of previous runs to compare (env: MAX_HISTORY)")
    p.add_argument("--top-k", type=int, help="entries per improvements/degradations list")
    p.add_argument("--significance-floor", type=float, help="minimum |change|%% to rank a result")
    p.add_argument("--summary-flat", type=float, help="|change|%% at or below which the summary shows flat")
    p.add_argument("--fail-threshold", type=float, help="|change|%% above which a degradation fails the run")
    p.add_argument("--report-format", choices=["markdown", "json"], help="persisted report format")
    p.add_argument("--no-report", action="store_true", help="do not persist a report document")
    p.add_argument("--json", action="store_true", help="print the JSON report instead of the console summary")


def run_compare_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    identity = TestIdentity.from_args(ns.client, ns.test)
    settings = settings_from_namespace(
        ctx,
        ns,
        max_history=ns.max_history,
        top_k=ns.top_k,
        significance_floor_pct=ns.significance_floor,
        summary_flat_pct=ns.summary_flat,
        fail_threshold_pct=ns.fail_threshold,
        report_format=ns.report_format,
    )
    selection = BaselineSelection.build(split_names(ns.compare_with) or getenv_list("COMPARE_WITH"), settings.max_history)
    store = ResultStore(settings.reports_root, settings.snapshot_glob)
    as_json = ctx.as_json or ns.json

    try:
        history = store.list_snapshots(identity)
        log_event(ctx, "info", "store", "list", identity=str(identity), snapshots=len(history))
        chosen = select_baselines(history, selection, lambda name: store.resolve(identity, name))
    except NoHistoryError as exc:
        log_event(ctx, "info", "compare", "skip", identity=str(identity), reason=exc.kind)
        if as_json:
            print(dumps_json({"schema_version": 1, "tool": "perfctl", "status": "skipped", "message": str(exc)}))
        else:
            print(f"No comparison performed: {exc}")
        return OK
    log_event(
        ctx,
        "info",
        "baseline",
        "select",
        mode=chosen.mode.value,
        current=chosen.current.name,
        baselines=",".join(b.name for b in chosen.baselines),
    )

    current = chosen.current.load()
    baselines = [b.load() for b in chosen.baselines]
    results = compare_snapshots(current, baselines, DEFAULT_CATALOG)
    ranking = rank(
        results,
        chosen.most_recent.name,
        k=settings.top_k,
        floor=settings.significance_floor_pct,
        flat_threshold=settings.summary_flat_pct,
    )
    gate = evaluate_gate(ranking.degradations, settings.fail_threshold_pct)
    log_event(
        ctx,
        "info",
        "compare",
        "done",
        comparisons=len(results),
        improvements=len(ranking.improvements),
        degradations=len(ranking.degradations),
    )
    report = ComparisonReport(
        identity=identity,
        baseline_set=chosen,
        results=results,
        ranking=ranking,
        gate=gate,
        settings=settings,
        generated_at=utc_now(),
    )

    written = None
    if not ns.no_report:
        written = write_report(store.directory(identity), report, settings.report_format)
        log_event(ctx, "info", "report", "write", path=str(written), format=settings.report_format)

    if as_json:
        payload = validate_report_payload(build_report_payload(report))
        if written is not None:
            payload = {**payload, "report_path": str(written)}
        print(dumps_json(payload, pretty=not ctx.as_json))
    else:
        print(render_console(report, written))
    log_event(ctx, "info" if gate.passed else "warning", "gate", "result", status=gate.status, regressions=len(gate.regressions))
    return gate.exit_code
