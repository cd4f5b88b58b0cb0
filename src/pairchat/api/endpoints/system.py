"""System and transparency endpoints for the Pairchat API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from pairchat.api.dependencies import RateLimiterDep, SettingsDep, StoreDep
from pairchat.core.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config(settings: SettingsDep) -> dict[str, object]:
    """Return a sanitized snapshot of runtime configuration.

    Args:
        settings: Settings the application was created with

    Returns:
        Dictionary with app metadata, rate limit parameters and known users
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "rate_limit": {
            "window_ms": settings.rate_limit_window_ms,
            "window_seconds": settings.rate_limit_window_seconds,
            "max_requests": settings.rate_limit_max_requests,
            "trust_forwarded_for": settings.rate_limit_trust_forwarded_for,
        },
        "users": sorted(settings.seed_users),
        "admin_reset_enabled": settings.admin_reset_enabled,
    }


@router.get("/stats")
async def get_activity_stats(store: StoreDep, rate_limiter: RateLimiterDep) -> dict[str, int]:
    """Counts of users, messages, chats and tracked rate limit clients."""
    return {**store.counts(), "rate_limited_clients": len(rate_limiter)}


@router.post("/reset", status_code=status.HTTP_200_OK)
async def reset_state(
    settings: SettingsDep,
    store: StoreDep,
    rate_limiter: RateLimiterDep,
) -> dict[str, str]:
    """Clear all messages, chats and rate limit windows.

    Only available when ``ADMIN_RESET_ENABLED`` is set; otherwise the route
    behaves as if it did not exist.
    """
    if not settings.admin_reset_enabled:
        raise NotFoundError("Route not found")
    store.reset_all()
    rate_limiter.reset()
    logger.warning("State reset via /system/reset")
    return {"status": "reset"}
