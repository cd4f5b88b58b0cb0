# src/pairchat/db/time.py
"""Clock helpers shared by the store, the services and the rate limiter."""

import time
from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def monotonic_ms() -> int:
    """Return a monotonic clock reading in whole milliseconds."""
    return time.monotonic_ns() // 1_000_000
