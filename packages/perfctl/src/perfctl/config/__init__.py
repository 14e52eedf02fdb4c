from __future__ import annotations

from .loader import DEFAULTS, CompareSettings, load_settings

__all__ = ["DEFAULTS", "CompareSettings", "load_settings"]
