# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pairchat.core.settings import Settings
from pairchat.db.store import Store
from pairchat.main import create_app
from pairchat.services.chat_service import ChatQueryService
from pairchat.services.message_service import MessageService
from pairchat.services.rate_limit import RateLimiter

SEED_USERS = ("user1", "user2", "user3", "user4")


class FakeClock:
    """Deterministic UTC clock advancing one second per reading unless frozen."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start or datetime(2024, 1, 1, tzinfo=UTC)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        return current


@pytest.fixture()
def test_settings() -> Settings:
    """Settings with defaults plus the admin reset route enabled."""
    return Settings(seed_users=list(SEED_USERS), admin_reset_enabled=True)


@pytest.fixture()
def store() -> Store:
    return Store(users=SEED_USERS)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def message_service(store: Store, clock: FakeClock) -> MessageService:
    return MessageService(store, clock=clock)


@pytest.fixture()
def chat_service(store: Store) -> ChatQueryService:
    return ChatQueryService(store)


@pytest.fixture()
def app(test_settings: Settings, store: Store) -> FastAPI:
    return create_app(test_settings, store=store)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_client(store: Store) -> Callable[..., TestClient]:
    """Build a client for an app with a custom rate limiter."""

    def _make(max_requests: int = 100, window_ms: int = 60_000, **kwargs: object) -> TestClient:
        settings = Settings(
            seed_users=list(SEED_USERS),
            rate_limit_max_requests=max_requests,
            rate_limit_window_ms=window_ms,
        )
        limiter = RateLimiter(window_ms=window_ms, max_requests=max_requests)
        app = create_app(settings, store=store, rate_limiter=limiter)
        return TestClient(app, base_url="http://test", **kwargs)

    return _make


@pytest.fixture()
def send(client: TestClient) -> Callable[[str, str, str], dict[str, Any]]:
    """POST a message through the API and return the created message body."""

    def _send(sender: str, recipient: str, content: str) -> dict[str, Any]:
        response = client.post(
            "/messages",
            json={"sender": sender, "recipient": recipient, "content": content},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _send
