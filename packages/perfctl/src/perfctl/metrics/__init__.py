from __future__ import annotations

from .catalog import DEFAULT_CATALOG, MetricDefinition, validate_catalog
from .snapshot import Snapshot, SnapshotFile, load_snapshot, parse_snapshot, read_metric, read_statistic

__all__ = [
    "DEFAULT_CATALOG",
    "MetricDefinition",
    "Snapshot",
    "SnapshotFile",
    "load_snapshot",
    "parse_snapshot",
    "read_metric",
    "read_statistic",
    "validate_catalog",
]
