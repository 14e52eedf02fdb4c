from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from perfctl.cli.main import main
from perfctl.core.exit_codes import ERR_ARTIFACT, ERR_CONFIG, ERR_REGRESSION, OK

pytestmark = pytest.mark.integration

TEST_DIR = ("examples", "auth-flow")


def _compare(reports_root: Path, *extra: str) -> int:
    return main(["--reports-root", str(reports_root), "compare", "--client", "examples", "--test", "auth-flow", *extra])


def _reports(reports_root: Path) -> list[str]:
    directory = reports_root.joinpath(*TEST_DIR)
    return sorted(p.name for p in directory.glob("comparison-*")) if directory.is_dir() else []


def test_error_rate_regression_fails_and_writes_report(reports_root, write_snapshot, k6_summary, capsys) -> None:
    write_snapshot("k6-output-1.json", k6_summary(failed=0.010), 1000)
    write_snapshot("k6-output-2.json", k6_summary(failed=0.025), 2000)
    code = _compare(reports_root)
    out = capsys.readouterr().out
    assert code == ERR_REGRESSION
    assert "REGRESSION DETECTED" in out
    assert "Error Rate: +150.00% vs k6-output-1.json" in out
    (name,) = _reports(reports_root)
    assert name.endswith(".md")
    assert f"Comparison report saved: {reports_root.joinpath(*TEST_DIR, name)}" in out


def test_latency_improvement_passes(reports_root, write_snapshot, k6_summary, capsys) -> None:
    write_snapshot("k6-output-1.json", k6_summary(p95=480.0), 1000)
    write_snapshot("k6-output-2.json", k6_summary(p95=420.0), 2000)
    assert _compare(reports_root) == OK
    out = capsys.readouterr().out
    assert "1. Response Time (p95)" in out
    assert "Change:   -12.50%" in out
    assert "No significant degradations detected" in out


def test_first_execution_is_not_an_error(reports_root, capsys) -> None:
    assert _compare(reports_root) == OK
    out = capsys.readouterr().out
    assert out.startswith("No comparison performed: no previous results found for examples/auth-flow")
    assert _reports(reports_root) == []


def test_single_snapshot_needs_a_second_run(reports_root, write_snapshot, k6_summary, capsys) -> None:
    write_snapshot("k6-output-1.json", k6_summary(), 1000)
    assert _compare(reports_root) == OK
    assert "run the test at least twice" in capsys.readouterr().out
    assert _reports(reports_root) == []


def test_missing_explicit_baseline_aborts(reports_root, write_snapshot, k6_summary, capsys) -> None:
    write_snapshot("k6-output-1.json", k6_summary(), 1000)
    write_snapshot("k6-output-2.json", k6_summary(), 2000)
    assert _compare(reports_root, "--compare-with", "k6-output-9.json") == ERR_CONFIG
    captured = capsys.readouterr()
    assert "error: baseline not found: k6-output-9.json" in captured.err
    assert captured.out == ""
    assert _reports(reports_root) == []


def test_explicit_baselines_from_env(reports_root, write_snapshot, k6_summary, capsys, monkeypatch) -> None:
    write_snapshot("k6-output-1.json", k6_summary(p95=300.0), 1000)
    write_snapshot("k6-output-2.json", k6_summary(p95=480.0), 2000)
    write_snapshot("k6-output-3.json", k6_summary(p95=482.0), 3000)
    monkeypatch.setenv("COMPARE_WITH", "k6-output-1.json")
    assert _compare(reports_root, "--json", "--no-report") == ERR_REGRESSION
    payload = json.loads(capsys.readouterr().out)
    assert payload["selection_mode"] == "explicit_list"
    assert payload["baselines"] == ["k6-output-1.json"]
    assert "report_path" not in payload
    assert _reports(reports_root) == []


def test_max_history_limits_baselines(reports_root, write_snapshot, k6_summary, capsys) -> None:
    for idx in range(1, 5):
        write_snapshot(f"k6-output-{idx}.json", k6_summary(), 1000 * idx)
    assert _compare(reports_root, "--max-history", "2", "--json") == OK
    payload = json.loads(capsys.readouterr().out)
    assert payload["current"] == "k6-output-4.json"
    assert payload["baselines"] == ["k6-output-3.json", "k6-output-2.json"]
    assert payload["selection_mode"] == "most_recent_n"
    assert Path(payload["report_path"]).is_file()


def test_unselected_corrupt_snapshot_is_never_read(reports_root, write_snapshot, k6_summary) -> None:
    write_snapshot("k6-output-1.json", "{not json", 1000)
    write_snapshot("k6-output-2.json", k6_summary(), 2000)
    write_snapshot("k6-output-3.json", k6_summary(), 3000)
    assert _compare(reports_root, "--max-history", "1", "--no-report") == OK


def test_corrupt_selected_snapshot_is_an_artifact_error(reports_root, write_snapshot, k6_summary, capsys) -> None:
    write_snapshot("k6-output-1.json", "{not json", 1000)
    write_snapshot("k6-output-2.json", k6_summary(), 2000)
    assert _compare(reports_root) == ERR_ARTIFACT
    assert "snapshot is not valid JSON: k6-output-1.json" in capsys.readouterr().err
    assert _reports(reports_root) == []


def test_undecodable_snapshot_is_an_artifact_error(reports_root, write_snapshot, k6_summary, capsys) -> None:
    write_snapshot("k6-output-1.json", k6_summary(), 1000)
    current = write_snapshot("k6-output-2.json", k6_summary(), 2000)
    current.write_bytes(b'{"metrics": "\xff\xfe"}')
    os.utime(current, (2000, 2000))
    assert _compare(reports_root) == ERR_ARTIFACT
    assert "unable to decode" in capsys.readouterr().err
    assert _reports(reports_root) == []


def test_back_to_back_runs_keep_both_reports(reports_root, write_snapshot, k6_summary, monkeypatch) -> None:
    frozen = datetime(2024, 5, 1, 12, 30, 5, tzinfo=timezone.utc)
    monkeypatch.setattr("perfctl.commands.compare.command.utc_now", lambda: frozen)
    write_snapshot("k6-output-1.json", k6_summary(), 1000)
    write_snapshot("k6-output-2.json", k6_summary(), 2000)
    assert _compare(reports_root) == OK
    write_snapshot("k6-output-3.json", k6_summary(), 3000)
    assert _compare(reports_root) == OK
    assert _reports(reports_root) == [
        "comparison-20240501T123005000000Z-1.md",
        "comparison-20240501T123005000000Z.md",
    ]


def test_json_report_format(reports_root, write_snapshot, k6_summary, capsys) -> None:
    write_snapshot("k6-output-1.json", k6_summary(), 1000)
    write_snapshot("k6-output-2.json", k6_summary(), 2000)
    assert _compare(reports_root, "--report-format", "json") == OK
    (name,) = _reports(reports_root)
    document = json.loads(reports_root.joinpath(*TEST_DIR, name).read_text(encoding="utf-8"))
    assert document["schema_name"] == "perfctl.comparison.v1"
    assert document["gate"]["status"] == "pass"


def test_ci_switches_to_json_output(reports_root, write_snapshot, k6_summary, capsys, monkeypatch) -> None:
    monkeypatch.setenv("CI", "true")
    write_snapshot("k6-output-1.json", k6_summary(), 1000)
    write_snapshot("k6-output-2.json", k6_summary(), 2000)
    assert _compare(reports_root, "--no-report") == OK
    out = capsys.readouterr().out
    assert len(out.strip().splitlines()) == 1
    assert json.loads(out)["tool"] == "perfctl"


def test_fail_threshold_override(reports_root, write_snapshot, k6_summary) -> None:
    write_snapshot("k6-output-1.json", k6_summary(failed=0.010), 1000)
    write_snapshot("k6-output-2.json", k6_summary(failed=0.025), 2000)
    assert _compare(reports_root, "--fail-threshold", "200", "--no-report") == OK


def test_test_suffix_is_ignored(reports_root, write_snapshot, k6_summary) -> None:
    write_snapshot("k6-output-1.json", k6_summary(), 1000)
    write_snapshot("k6-output-2.json", k6_summary(), 2000)
    code = main(["--reports-root", str(reports_root), "compare", "--client", "examples", "--test", "auth-flow.ts", "--no-report"])
    assert code == OK


def test_missing_identity_is_a_config_error(capsys) -> None:
    assert main(["compare", "--client", "examples"]) == ERR_CONFIG
    assert "error: --client and --test are required" in capsys.readouterr().err


def test_json_error_envelope(capsys) -> None:
    assert main(["--format", "json", "compare"]) == ERR_CONFIG
    envelope = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert envelope["status"] == "error"
    assert envelope["errors"][0]["kind"] == "configuration_error"
