from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..compare.comparator import Classification, ComparisonResult
from ..core.exit_codes import ERR_REGRESSION, OK

FAIL_THRESHOLD_PCT = 10.0


@dataclass(frozen=True)
class GateDecision:
    passed: bool
    exit_code: int
    threshold: float
    regressions: tuple[ComparisonResult, ...]

    @property
    def status(self) -> str:
        return "pass" if self.passed else "fail"

    def to_payload(self) -> dict[str, object]:
        return {
            "status": self.status,
            "exit_code": self.exit_code,
            "fail_threshold_pct": self.threshold,
            "regressions": [r.to_payload() for r in self.regressions],
        }


def evaluate_gate(degradations: Sequence[ComparisonResult], threshold: float = FAIL_THRESHOLD_PCT) -> GateDecision:
    regressions = tuple(
        r for r in degradations if r.classification is Classification.DEGRADATION and r.magnitude > threshold
    )
    if regressions:
        return GateDecision(passed=False, exit_code=ERR_REGRESSION, threshold=threshold, regressions=regressions)
    return GateDecision(passed=True, exit_code=OK, threshold=threshold, regressions=())
