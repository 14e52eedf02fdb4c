from __future__ import annotations

from .results import ResultStore, TestIdentity

__all__ = ["ResultStore", "TestIdentity"]
