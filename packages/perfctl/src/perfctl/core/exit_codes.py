from __future__ import annotations

OK = 0
ERR_REGRESSION = 1
ERR_CONFIG = 2
ERR_ARTIFACT = 3
ERR_VALIDATION = 4
ERR_INTERNAL = 99
