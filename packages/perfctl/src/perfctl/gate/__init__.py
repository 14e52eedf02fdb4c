from __future__ import annotations

from .exit_policy import FAIL_THRESHOLD_PCT, GateDecision, evaluate_gate

__all__ = ["FAIL_THRESHOLD_PCT", "GateDecision", "evaluate_gate"]
