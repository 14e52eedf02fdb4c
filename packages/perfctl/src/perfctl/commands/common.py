from __future__ import annotations

import argparse
from typing import Any

from ..config.loader import CompareSettings, load_settings
from ..core.context import RunContext


def settings_from_namespace(ctx: RunContext, ns: argparse.Namespace, **overrides: Any) -> CompareSettings:
    return load_settings(
        ctx.cwd,
        getattr(ns, "config", None),
        {"reports_root": getattr(ns, "reports_root", None), **overrides},
    )


def split_names(values: list[str] | None) -> list[str] | None:
    if not values:
        return None
    names = [part.strip() for value in values for part in value.split(",") if part.strip()]
    return names or None
