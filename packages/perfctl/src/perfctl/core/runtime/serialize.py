"""JSON output for reports, command payloads and error envelopes."""

from __future__ import annotations

import json
from typing import Any


def dumps_json(payload: Any, pretty: bool = False) -> str:
    """Serialize with sorted keys; NaN and infinities raise ValueError instead of
    producing tokens that strict JSON parsers reject."""
    return json.dumps(payload, indent=2 if pretty else None, sort_keys=True, allow_nan=False)
