"""Rate limiting middleware applied to every request."""

from __future__ import annotations

import logging

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from pairchat.core.errors import InternalError, RateLimitExceededError
from pairchat.schemas.common import RateLimitErrorResponse
from pairchat.services.rate_limit import UNKNOWN_CLIENT_KEY, RateLimiter

logger = logging.getLogger(__name__)


def get_client_key(request: Request, trust_forwarded_for: bool = False) -> str:
    """Return the identity a request is rate limited under.

    The socket peer address is used unless proxy headers are explicitly
    trusted, in which case the first ``X-Forwarded-For`` hop wins.
    """
    if trust_forwarded_for:
        forwarded = request.headers.get("X-Forwarded-For", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT_KEY


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Gate each request through the app's ``RateLimiter``.

    The limiter lives on ``app.state.rate_limiter`` so each app instance
    keeps its own counters. Denied requests are answered with 429 before any
    route runs. Every other response gets the current ``X-RateLimit-*``
    headers, including the generic 500 returned when a route fails.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limiter: RateLimiter = request.app.state.rate_limiter
        trust_forwarded_for: bool = request.app.state.settings.rate_limit_trust_forwarded_for

        result = limiter.check(get_client_key(request, trust_forwarded_for))
        if not result.allowed:
            denial = RateLimitExceededError(retry_after=result.reset_seconds)
            body = RateLimitErrorResponse(error=denial.message, retry_after=denial.retry_after)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=body.model_dump(by_alias=True),
                headers={**result.headers(), "Retry-After": str(denial.retry_after)},
            )

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": InternalError.default_message},
                headers=result.headers(),
            )
        response.headers.update(result.headers())
        return response
