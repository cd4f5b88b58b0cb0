"""HTTP middleware for the Pairchat API."""

from .rate_limit import RateLimitMiddleware, get_client_key

__all__ = ["RateLimitMiddleware", "get_client_key"]
