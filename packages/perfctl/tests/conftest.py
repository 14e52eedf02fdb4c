from __future__ import annotations

import json
import os
import socket
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from hypothesis import settings
from hypothesis.database import DirectoryBasedExampleDatabase

from perfctl.metrics.snapshot import Snapshot, parse_snapshot

_ALLOWED_MARKERS = {"unit", "integration", "slow"}
_ENV_KEYS = ("CI", "RUN_ID", "MAX_HISTORY", "COMPARE_WITH", "PERFCTL_REPORTS_ROOT")

_ROOT = Path(__file__).resolve().parents[3]
_HYPOTHESIS_DB = _ROOT / "artifacts/perfctl/.hypothesis/examples"
settings.register_profile("perfctl", database=DirectoryBasedExampleDatabase(_HYPOTHESIS_DB))
settings.load_profile("perfctl")

SummaryFactory = Callable[..., dict[str, Any]]


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def _k6_summary(
    avg: float | None = 200.0,
    p95: float | None = 480.0,
    p99: float | None = 650.0,
    rate: float | None = 120.0,
    failed: float | None = 0.01,
    checks: float | None = 0.99,
    iterations: float | None = 1000,
    vus: float | None = 50,
) -> dict[str, Any]:
    duration = {k: v for k, v in (("avg", avg), ("p(95)", p95), ("p(99)", p99)) if v is not None}
    metrics: dict[str, Any] = {}
    if duration:
        metrics["http_req_duration"] = {"type": "trend", "contains": "time", "values": duration}
    if rate is not None:
        metrics["http_reqs"] = {"type": "counter", "values": {"count": 12000, "rate": rate}}
    if failed is not None:
        metrics["http_req_failed"] = {"type": "rate", "values": {"rate": failed, "passes": 10, "fails": 990}}
    if checks is not None:
        metrics["checks"] = {"type": "rate", "values": {"rate": checks}}
    if iterations is not None:
        metrics["iterations"] = {"type": "counter", "values": {"count": iterations, "rate": 16.6}}
    if vus is not None:
        metrics["vus"] = {"type": "gauge", "values": {"value": 1, "min": 1, "max": vus}}
    return {"root_group": {"name": "", "checks": []}, "metrics": metrics}


@pytest.fixture
def k6_summary() -> SummaryFactory:
    return _k6_summary


@pytest.fixture
def make_snapshot() -> Callable[[str, dict[str, Any]], Snapshot]:
    def _make(name: str, document: dict[str, Any], mtime: float = 0.0) -> Snapshot:
        return parse_snapshot(Path(name), json.dumps(document), mtime)

    return _make


@pytest.fixture
def reports_root(tmp_path: Path) -> Path:
    root = tmp_path / "reports"
    root.mkdir()
    return root


@pytest.fixture
def write_snapshot(reports_root: Path) -> Callable[..., Path]:
    """Write reports/<client>/<test>/<name> with an explicit, increasing mtime."""

    def _write(
        name: str,
        document: dict[str, Any] | str,
        mtime: float,
        client: str = "examples",
        test: str = "auth-flow",
    ) -> Path:
        path = reports_root / client / test / name
        path.parent.mkdir(parents=True, exist_ok=True)
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text, encoding="utf-8")
        os.utime(path, (mtime, mtime))
        return path

    return _write
