from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..compare.baseline import BaselineSet
from ..compare.comparator import ComparisonResult
from ..compare.ranker import Ranking
from ..config.loader import CompareSettings
from ..core.errors import ReportValidationError
from ..core.schema.schema import load_bundled_schema, validate_payload
from ..gate.exit_policy import GateDecision
from ..store.results import TestIdentity

REPORT_SCHEMA_NAME = "perfctl.comparison.v1"


@dataclass(frozen=True)
class ComparisonReport:
    identity: TestIdentity
    baseline_set: BaselineSet
    results: tuple[ComparisonResult, ...]
    ranking: Ranking
    gate: GateDecision
    settings: CompareSettings
    generated_at: datetime


def build_report_payload(report: ComparisonReport) -> dict[str, Any]:
    return {
        "schema_name": REPORT_SCHEMA_NAME,
        "schema_version": 1,
        "tool": "perfctl",
        "client": report.identity.client,
        "test": report.identity.test,
        "generated_at": report.generated_at.isoformat(),
        "selection_mode": report.baseline_set.mode.value,
        "current": report.baseline_set.current.name,
        "baselines": [b.name for b in report.baseline_set.baselines],
        "thresholds": report.settings.thresholds_payload(),
        "improvements": [r.to_payload() for r in report.ranking.improvements],
        "degradations": [r.to_payload() for r in report.ranking.degradations],
        "summary": {
            "baseline": report.ranking.summary_baseline,
            "rows": [{**row.result.to_payload(), "status": row.status.value} for row in report.ranking.summary],
        },
        "comparisons": [r.to_payload() for r in report.results],
        "gate": report.gate.to_payload(),
    }


def validate_report_payload(payload: dict[str, Any]) -> dict[str, Any]:
    schema = load_bundled_schema("perfctl.reporting.schemas", "comparison-report.schema.json")
    validate_payload(payload, schema, ReportValidationError)
    return payload
