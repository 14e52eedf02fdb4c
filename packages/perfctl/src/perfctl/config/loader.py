"""Layered settings: defaults, then a YAML file, then environment, then CLI flags."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Literal

import yaml

from ..compare.baseline import DEFAULT_MAX_HISTORY
from ..compare.ranker import DEFAULT_TOP_K, SIGNIFICANCE_FLOOR_PCT, SUMMARY_FLAT_PCT
from ..compare.trend import TREND_STABLE_PCT
from ..core.errors import ConfigurationError
from ..core.fs import read_text, resolve_under
from ..core.runtime.env import getenv
from ..core.schema.schema import load_bundled_schema, validate_payload
from ..gate.exit_policy import FAIL_THRESHOLD_PCT
from ..store.results import DEFAULT_SNAPSHOT_GLOB

CONFIG_FILENAME = "perfctl.yaml"
ReportFormat = Literal["markdown", "json"]


@dataclass(frozen=True)
class CompareSettings:
    reports_root: Path
    snapshot_glob: str = DEFAULT_SNAPSHOT_GLOB
    max_history: int = DEFAULT_MAX_HISTORY
    top_k: int = DEFAULT_TOP_K
    significance_floor_pct: float = SIGNIFICANCE_FLOOR_PCT
    summary_flat_pct: float = SUMMARY_FLAT_PCT
    fail_threshold_pct: float = FAIL_THRESHOLD_PCT
    trend_limit: int = 10
    trend_stable_pct: float = TREND_STABLE_PCT
    report_format: ReportFormat = "markdown"

    def thresholds_payload(self) -> dict[str, object]:
        return {
            "max_history": self.max_history,
            "top_k": self.top_k,
            "significance_floor_pct": self.significance_floor_pct,
            "summary_flat_pct": self.summary_flat_pct,
            "fail_threshold_pct": self.fail_threshold_pct,
        }


DEFAULTS: dict[str, Any] = {
    "reports_root": "reports",
    "snapshot_glob": DEFAULT_SNAPSHOT_GLOB,
    "max_history": DEFAULT_MAX_HISTORY,
    "top_k": DEFAULT_TOP_K,
    "significance_floor_pct": SIGNIFICANCE_FLOOR_PCT,
    "summary_flat_pct": SUMMARY_FLAT_PCT,
    "fail_threshold_pct": FAIL_THRESHOLD_PCT,
    "trend_limit": 10,
    "trend_stable_pct": TREND_STABLE_PCT,
    "report_format": "markdown",
}

_ENV_KEYS = {
    "PERFCTL_REPORTS_ROOT": "reports_root",
    "MAX_HISTORY": "max_history",
}


def _config_schema() -> dict[str, Any]:
    return load_bundled_schema("perfctl.config", "perfctl-config.schema.json")


def read_config_file(path: Path) -> dict[str, Any]:
    try:
        payload = yaml.safe_load(read_text(path)) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"config file must contain a mapping: {path}")
    validate_payload(payload, _config_schema(), ConfigurationError)
    return payload


def _env_layer() -> dict[str, Any]:
    layer: dict[str, Any] = {}
    for env_name, key in _ENV_KEYS.items():
        raw = getenv(env_name)
        if raw is None or not raw.strip():
            continue
        if key == "max_history":
            try:
                layer[key] = int(raw)
            except ValueError as exc:
                raise ConfigurationError(f"{env_name} must be an integer, got {raw!r}") from exc
        else:
            layer[key] = raw.strip()
    return layer


def load_settings(cwd: Path, config_path: str | None = None, overrides: dict[str, Any] | None = None) -> CompareSettings:
    merged: dict[str, Any] = dict(DEFAULTS)
    if config_path:
        path = resolve_under(cwd, config_path)
        if not path.is_file():
            raise ConfigurationError(f"config file not found: {path}")
        merged.update(read_config_file(path))
    elif (cwd / CONFIG_FILENAME).is_file():
        merged.update(read_config_file(cwd / CONFIG_FILENAME))
    merged.update(_env_layer())
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
    reports_root = merged.pop("reports_root")
    validate_payload({**merged, "reports_root": str(reports_root)}, _config_schema(), ConfigurationError)
    known = {f.name for f in fields(CompareSettings)}
    settings = CompareSettings(reports_root=resolve_under(cwd, reports_root))
    return replace(settings, **{k: v for k, v in merged.items() if k in known})
