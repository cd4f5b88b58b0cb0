"""Pairchat: two-party messaging with per-client rate limiting."""

__version__ = "1.0.0"
