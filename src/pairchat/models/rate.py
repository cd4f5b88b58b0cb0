# src/pairchat/models/rate.py
"""Fixed-window rate limit bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RateLimitEntry:
    """Request count for one client within the current window.

    ``window_reset_at`` is a monotonic millisecond reading.
    """

    count: int
    window_reset_at: int

    def expired(self, now_ms: int) -> bool:
        return now_ms >= self.window_reset_at
