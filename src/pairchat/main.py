# src/pairchat/main.py
"""Main entry point for the Pairchat application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pairchat.api import chats_router, messages_router, system_router
from pairchat.core.errors import InternalError, PairchatError
from pairchat.core.logging import configure_logging
from pairchat.core.settings import Settings, settings
from pairchat.db.store import Store
from pairchat.middleware.rate_limit import RateLimitMiddleware
from pairchat.services.rate_limit import RateLimiter

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route not found"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain errors and framework errors into ``{"error": ...}`` bodies."""

    @app.exception_handler(PairchatError)
    async def handle_domain_error(request: Request, exc: PairchatError) -> JSONResponse:
        if isinstance(exc, InternalError):
            logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc)
            return _error_response(exc.status_code, InternalError.default_message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods are both reported as missing routes
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error_response(status.HTTP_404_NOT_FOUND, ROUTE_NOT_FOUND)
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            InternalError.default_message,
        )


def create_app(
    app_settings: Settings | None = None,
    *,
    store: Store | None = None,
    rate_limiter: RateLimiter | None = None,
) -> FastAPI:
    """Build a FastAPI application with its own store and rate limiter.

    Args:
        app_settings: Configuration to use; defaults to the process settings
        store: Pre-built store, mainly for tests; seeded from settings otherwise
        rate_limiter: Pre-built limiter; built from settings otherwise

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=f"{app_settings.app_name} API",
        description="Two-party messaging API",
        version=app_settings.app_version,
        debug=app_settings.debug,
    )
    app.state.settings = app_settings
    app.state.store = store if store is not None else Store(users=app_settings.seed_users)
    app.state.rate_limiter = (
        rate_limiter if rate_limiter is not None else RateLimiter.from_settings(app_settings)
    )

    # Last added runs first: CORS wraps the rate limiter
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-RateLimit-Reset",
            "Retry-After",
        ],
    )

    register_exception_handlers(app)

    app.include_router(messages_router)
    app.include_router(chats_router)
    app.include_router(system_router)

    @app.on_event("startup")
    async def on_startup() -> None:
        configure_logging(app_settings.log_level)
        limiter: RateLimiter = app.state.rate_limiter
        logger.info(
            "%s %s started: rate limit %d requests per %d ms, %d known users",
            app_settings.app_name,
            app_settings.app_version,
            limiter.max_requests,
            limiter.window_ms,
            len(app.state.store.users),
        )

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        logger.info("%s shut down", app_settings.app_name)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": app_settings.app_name,
            "version": app_settings.app_version,
            "description": "Two-party messaging API",
            "docs": "/docs",
            "redoc": "/redoc",
        }

    return app


app = create_app()


def run() -> None:
    """Serve the default application with uvicorn."""
    import uvicorn

    configure_logging(settings.log_level)
    logger.info("Starting server on %s:%d", settings.host, settings.port)
    uvicorn.run(
        "pairchat.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
