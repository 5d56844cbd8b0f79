from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

SEGMENT_PREFIX = "seg"
CALIBRATION_PREFIX = "cal"


def now_utc() -> datetime:
    return datetime.now(UTC)


def make_id(prefix: str) -> str:
    if not prefix or "_" in prefix:
        raise ValueError(f"id prefix must be non-empty and free of underscores, got {prefix!r}")
    return f"{prefix}_{uuid4().hex[:12]}"


def new_segment_id() -> str:
    return make_id(SEGMENT_PREFIX)


def new_calibration_run_id() -> str:
    return make_id(CALIBRATION_PREFIX)
