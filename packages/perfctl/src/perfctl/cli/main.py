from __future__ import annotations

import argparse
import importlib
import platform
import sys

from .. import __version__
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_INTERNAL, OK
from ..core.runtime.env import getenv
from ..core.runtime.logging import log_event
from ..metrics.catalog import DEFAULT_CATALOG
from .constants import CONFIGURE_HOOKS, RUN_HOOKS
from .output import emit, render_error, resolve_output_format


def _import_attr(module_name: str, attr: str):
    return getattr(importlib.import_module(module_name), attr)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="perfctl", description="compare k6 load-test results against their history")
    p.add_argument("--version", action="version", version=f"perfctl {__version__}")
    p.add_argument("--config", help="YAML settings file (default: ./perfctl.yaml when present)")
    p.add_argument("--reports-root", help="root directory holding <client>/<test> results (env: PERFCTL_REPORTS_ROOT)")
    p.add_argument("--run-id", help="run identifier used in log events")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines on stderr")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable debug log events")
    vg.add_argument("--quiet", action="store_true", help="only emit warnings and errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    for module_name, attr in CONFIGURE_HOOKS:
        _import_attr(module_name, attr)(sub)

    metrics_p = sub.add_parser("metrics", help="list the metric catalog")
    metrics_p.add_argument("--json", action="store_true", help="emit JSON output")
    version_p = sub.add_parser("version", help="print version information")
    version_p.add_argument("--json", action="store_true", help="emit JSON output")
    return p


def _metrics_text() -> str:
    lines = []
    for row in DEFAULT_CATALOG:
        direction = "lower is better" if row.lower_is_better else "higher is better"
        scale = "" if row.scale == 1.0 else f" x{row.scale:g}"
        unit = f" [{row.unit}]" if row.unit else ""
        lines.append(f"{row.key}: {row.display_name}{unit} ({row.accessor_path}{scale}, {direction})")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    p = build_parser()
    ns = p.parse_args(raw_argv)
    fmt = resolve_output_format(cli_format=ns.format, ci_present=bool(getenv("CI")))
    ctx = RunContext.from_args(ns.run_id, fmt, ns.verbose, ns.quiet, ns.log_json)
    try:
        log_event(ctx, "info", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format)
        as_json = ctx.as_json or bool(getattr(ns, "json", False))
        if ns.cmd == "version":
            if not as_json:
                print(f"perfctl {__version__}")
                return OK
            emit(
                {
                    "schema_version": 1,
                    "tool": "perfctl",
                    "status": "ok",
                    "perfctl_version": __version__,
                    "python_version": platform.python_version(),
                },
                ctx.as_json,
            )
            return OK
        if ns.cmd == "metrics":
            if as_json:
                emit(
                    {
                        "schema_version": 1,
                        "tool": "perfctl",
                        "status": "ok",
                        "metrics": [row.to_payload() for row in DEFAULT_CATALOG],
                    },
                    ctx.as_json,
                )
            else:
                print(_metrics_text())
            return OK
        module_name, attr = RUN_HOOKS[ns.cmd]
        return _import_attr(module_name, attr)(ctx, ns)
    except ScriptError as exc:
        print(render_error(as_json=ctx.as_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=ctx.as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
