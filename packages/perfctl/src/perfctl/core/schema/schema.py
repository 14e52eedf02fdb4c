from __future__ import annotations

import json
from importlib import resources
from typing import Any

import jsonschema

from ..errors import ScriptError
from ..exit_codes import ERR_VALIDATION


def load_bundled_schema(package: str, name: str) -> dict[str, Any]:
    text = resources.files(package).joinpath(name).read_text(encoding="utf-8")
    return json.loads(text)


def schema_errors(payload: Any, schema: dict[str, Any]) -> list[str]:
    validator = jsonschema.Draft202012Validator(schema)
    errors: list[str] = []
    for err in sorted(validator.iter_errors(payload), key=lambda e: list(e.absolute_path)):
        pointer = "/".join(str(p) for p in err.absolute_path)
        errors.append(f"{pointer or '<root>'}: {err.message}")
    return errors


def validate_payload(payload: Any, schema: dict[str, Any], error_cls: type[ScriptError] | None = None) -> None:
    errors = schema_errors(payload, schema)
    if not errors:
        return
    message = f"schema validation failed at {errors[0]}"
    if error_cls is None:
        raise ScriptError(message, ERR_VALIDATION)
    raise error_cls(message)
