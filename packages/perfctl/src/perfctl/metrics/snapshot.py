from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from ..core.errors import FileReadError, MetricMissingError
from ..core.fs import read_text
from .catalog import MetricDefinition


@dataclass(frozen=True)
class SnapshotFile:
    """A snapshot on disk, identified by file name and modification time."""

    name: str
    path: Path
    mtime: float

    @classmethod
    def from_path(cls, path: Path) -> "SnapshotFile":
        return cls(name=path.name, path=path, mtime=path.stat().st_mtime)

    def load(self) -> "Snapshot":
        return load_snapshot(self.path)


@dataclass(frozen=True)
class Snapshot:
    name: str
    path: Path
    mtime: float
    metrics: Mapping[str, Any]

    def has_metric(self, metric: str) -> bool:
        return metric in self.metrics


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def parse_snapshot(path: Path, text: str, mtime: float) -> Snapshot:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FileReadError(f"snapshot is not valid JSON: {path.name}: {exc.msg} (line {exc.lineno})") from exc
    if not isinstance(document, dict):
        raise FileReadError(f"snapshot must be a JSON object: {path.name}")
    metrics = document.get("metrics", document)
    if not isinstance(metrics, dict):
        raise FileReadError(f"snapshot `metrics` must be a JSON object: {path.name}")
    return Snapshot(name=path.name, path=path, mtime=mtime, metrics=_freeze(metrics))


def load_snapshot(path: Path) -> Snapshot:
    if not path.is_file():
        raise FileReadError(f"snapshot not found: {path}")
    text = read_text(path)
    return parse_snapshot(path, text, path.stat().st_mtime)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def read_statistic(snapshot: Snapshot, metric: str, statistic: str | None) -> float:
    """Return one named statistic, or raise MetricMissingError when it is absent.

    A metric entry is either a bare number, a mapping of statistics, or a
    mapping with a nested `values` mapping of statistics.
    """
    entry = snapshot.metrics.get(metric)
    if entry is None:
        raise MetricMissingError(metric, statistic)
    if isinstance(entry, Mapping):
        if statistic is None:
            raise MetricMissingError(metric, statistic)
        values = entry.get("values")
        source = values if isinstance(values, Mapping) else entry
        number = _as_number(source.get(statistic))
    else:
        number = _as_number(entry)
    if number is None:
        raise MetricMissingError(metric, statistic)
    return number


def read_metric(snapshot: Snapshot, definition: MetricDefinition) -> float:
    value = read_statistic(snapshot, definition.metric, definition.statistic) * definition.scale
    if not math.isfinite(value):
        raise MetricMissingError(definition.metric, definition.statistic)
    return value
