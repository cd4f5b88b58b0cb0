"""In-memory storage layer."""

from .store import Store, new_id
from .time import monotonic_ms, utcnow

__all__ = ["Store", "monotonic_ms", "new_id", "utcnow"]
