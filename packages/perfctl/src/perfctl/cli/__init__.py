"""Console entry points for `perfctl` (`perfctl = perfctl.cli:main`).

The command modules are resolved from the hook tables in `cli.constants` only
when a parser is built, so `perfctl.cli` itself stays cheap to import.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = ["build_parser", "main"]

_MAIN_MODULE = "perfctl.cli.main"


def _entry(name: str) -> Any:
    return getattr(import_module(_MAIN_MODULE), name)


def build_parser():
    return _entry("build_parser")()


def main(argv: list[str] | None = None) -> int:
    return _entry("main")(argv)
