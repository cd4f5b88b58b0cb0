"""Shared Pydantic schemas for error responses."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    error: str = Field(..., description="Human-readable error message.")


class RateLimitErrorResponse(ErrorResponse):
    """Body returned with HTTP 429."""

    retry_after: int = Field(..., alias="retryAfter", description="Seconds until the window resets.")

    model_config = ConfigDict(populate_by_name=True)
