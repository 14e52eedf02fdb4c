"""Centralized environment variable helpers."""

from __future__ import annotations

import os


def getenv(name: str, default: str | None = None) -> str | None:
    return os.environ.get(name, default)


def getenv_list(name: str) -> list[str] | None:
    raw = os.environ.get(name)
    if raw is None:
        return None
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or None
