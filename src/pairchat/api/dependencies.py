"""Shared API dependencies.

Services are built per request around the store attached to the running
application, so separate app instances never share state.
"""

from typing import Annotated

from fastapi import Depends, Request

from pairchat.core.settings import Settings
from pairchat.db.store import Store
from pairchat.services.chat_service import ChatQueryService
from pairchat.services.message_service import MessageService
from pairchat.services.rate_limit import RateLimiter


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_store(request: Request) -> Store:
    """Return the application's in-memory store."""
    return request.app.state.store


def get_rate_limiter(request: Request) -> RateLimiter:
    """Return the application's rate limiter."""
    return request.app.state.rate_limiter


StoreDep = Annotated[Store, Depends(get_store)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
RateLimiterDep = Annotated[RateLimiter, Depends(get_rate_limiter)]


def get_message_service(store: StoreDep) -> MessageService:
    return MessageService(store)


def get_chat_query_service(store: StoreDep) -> ChatQueryService:
    return ChatQueryService(store)


MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
ChatQueryServiceDep = Annotated[ChatQueryService, Depends(get_chat_query_service)]
