from __future__ import annotations

import pytest

from perfctl.core.errors import ConfigurationError
from perfctl.metrics.catalog import DEFAULT_CATALOG, MetricDefinition, validate_catalog


def test_default_catalog_keys_are_unique_and_directional() -> None:
    keys = [row.key for row in DEFAULT_CATALOG]
    assert len(keys) == len(set(keys))
    by_key = {row.key: row for row in DEFAULT_CATALOG}
    assert by_key["http_req_duration.p95"].lower_is_better
    assert by_key["http_req_failed.rate"].lower_is_better
    assert by_key["http_req_failed.rate"].scale == 100.0
    assert not by_key["http_reqs.rate"].lower_is_better
    assert not by_key["checks.rate"].lower_is_better


def test_accessor_path_joins_metric_and_statistic() -> None:
    row = MetricDefinition("x", "X", "http_req_duration", "p(95)", "ms", True)
    assert row.accessor_path == "http_req_duration.p(95)"
    flat = MetricDefinition("y", "Y", "data_received", None, "B", False)
    assert flat.accessor_path == "data_received"


def test_validate_catalog_rejects_duplicate_keys() -> None:
    row = MetricDefinition("dup", "Dup", "vus", "max", "", False)
    with pytest.raises(ConfigurationError, match="duplicate metric key"):
        validate_catalog((row, row))


@pytest.mark.parametrize("scale", [0.0, float("nan"), float("inf")])
def test_validate_catalog_rejects_bad_scale(scale: float) -> None:
    row = MetricDefinition("bad", "Bad", "vus", "max", "", False, scale=scale)
    with pytest.raises(ConfigurationError, match="scale"):
        validate_catalog((row,))


def test_validate_catalog_rejects_empty_catalog() -> None:
    with pytest.raises(ConfigurationError):
        validate_catalog(())
