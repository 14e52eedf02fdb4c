"""CLI payload output helpers."""

from __future__ import annotations

from ..core.runtime.serialize import dumps_json


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def resolve_output_format(*, cli_format: str | None, ci_present: bool) -> str:
    if cli_format:
        return cli_format
    return "json" if ci_present else "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error") -> str:
    if as_json:
        return dumps_json(
            {
                "schema_name": "perfctl.error.v1",
                "schema_version": 1,
                "tool": "perfctl",
                "status": "error",
                "errors": [{"code": code, "kind": kind, "message": message}],
            },
            pretty=False,
        )
    return f"error: {message}"
