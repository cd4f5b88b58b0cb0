"""Fixed-window request rate limiting keyed by client identity."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Final

from pairchat.core.settings import Settings
from pairchat.db.time import monotonic_ms
from pairchat.models import RateLimitEntry

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT_KEY: Final[str] = "unknown"


@dataclass(frozen=True, slots=True)
class RateLimitResult:
    """Outcome of a single rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    reset_seconds: int

    def headers(self) -> dict[str, str]:
        """Return the ``X-RateLimit-*`` response headers for this result."""
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_seconds),
        }


class RateLimiter:
    """Count requests per client in fixed, non-sliding windows.

    Each client key gets a window of ``window_ms`` starting at its first
    request. Within the window every call increments the count, including
    calls that are denied. Once the window lapses the next call opens a new
    one. Bursts across a window boundary are possible and accepted.

    Expired entries are swept at most once per window length, so keys that
    stop sending do not accumulate.
    """

    def __init__(
        self,
        window_ms: int = 60_000,
        max_requests: int = 100,
        clock: Callable[[], int] = monotonic_ms,
    ) -> None:
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        self._window_ms = window_ms
        self._max_requests = max_requests
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._next_sweep_at: int | None = None
        self._lock = Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> RateLimiter:
        return cls(
            window_ms=settings.rate_limit_window_ms,
            max_requests=settings.rate_limit_max_requests,
        )

    @property
    def window_ms(self) -> int:
        return self._window_ms

    @property
    def max_requests(self) -> int:
        return self._max_requests

    def check(self, client_key: str | None, now_ms: int | None = None) -> RateLimitResult:
        """Record one request for ``client_key`` and report whether it may proceed.

        Args:
            client_key: Client identity such as an IP address. Empty or missing
                keys share a single sentinel bucket.
            now_ms: Current time in milliseconds; defaults to the limiter clock.

        Returns:
            RateLimitResult with the decision and header values.
        """
        key = client_key or UNKNOWN_CLIENT_KEY
        now = self._clock() if now_ms is None else now_ms

        with self._lock:
            if self._next_sweep_at is None:
                self._next_sweep_at = now + self._window_ms
            elif now >= self._next_sweep_at:
                self._drop_expired(now)
                self._next_sweep_at = now + self._window_ms
            entry = self._entries.get(key)
            if entry is None or entry.expired(now):
                entry = RateLimitEntry(count=0, window_reset_at=now + self._window_ms)
                self._entries[key] = entry
            entry.count += 1
            count = entry.count
            reset_at = entry.window_reset_at

        result = RateLimitResult(
            allowed=count <= self._max_requests,
            limit=self._max_requests,
            remaining=max(0, self._max_requests - count),
            reset_seconds=math.ceil((reset_at - now) / 1000),
        )
        if not result.allowed:
            logger.warning(
                "Rate limit exceeded for %s (%d/%d, resets in %ds)",
                key,
                count,
                self._max_requests,
                result.reset_seconds,
            )
        return result

    def purge_expired(self, now_ms: int | None = None) -> int:
        """Drop every entry whose window has lapsed and return how many were removed."""
        now = self._clock() if now_ms is None else now_ms
        with self._lock:
            return self._drop_expired(now)

    def _drop_expired(self, now: int) -> int:
        expired = [key for key, entry in self._entries.items() if entry.expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Dropped %d expired rate limit entries", len(expired))
        return len(expired)

    def reset(self, client_key: str | None = None) -> None:
        """Forget the window for one client, or for every client when omitted."""
        with self._lock:
            if client_key is None:
                self._entries.clear()
            else:
                self._entries.pop(client_key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
