from __future__ import annotations

from datetime import datetime, timezone

# Microseconds keep two runs within one wall-clock second apart.
STAMP_FORMAT = "%Y%m%dT%H%M%S%fZ"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def utc_stamp(moment: datetime | None = None) -> str:
    return (moment or utc_now()).strftime(STAMP_FORMAT)
