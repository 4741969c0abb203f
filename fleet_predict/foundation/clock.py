"""Clock utilities.

All wall-clock timestamps in fleet-predict are UTC-aware.  This module is
the single source of "now" so tests can monkey-patch it trivially.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def monotonic_ms() -> float:
    """Monotonic timer in milliseconds for measuring processing latency."""
    return time.perf_counter() * 1000.0
