"""Tests for the rate limiting middleware and error boundaries."""

import logging

from fastapi import status
from fastapi.testclient import TestClient

from pairchat.core.errors import InternalError
from pairchat.core.settings import Settings
from pairchat.db.store import Store
from pairchat.main import create_app


def test_every_response_carries_rate_limit_headers(make_client) -> None:
    client = make_client(max_requests=5)

    ok = client.get("/health")
    bad = client.get("/messages/user/nobody")

    assert ok.headers["X-RateLimit-Limit"] == "5"
    assert ok.headers["X-RateLimit-Remaining"] == "4"
    assert ok.headers["X-RateLimit-Reset"] == "60"
    assert bad.status_code == status.HTTP_400_BAD_REQUEST
    assert bad.headers["X-RateLimit-Remaining"] == "3"


def test_request_over_limit_gets_429(make_client) -> None:
    client = make_client(max_requests=100)

    for _ in range(100):
        assert client.get("/health").status_code == status.HTTP_200_OK

    response = client.get("/health")

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.headers["X-RateLimit-Remaining"] == "0"
    assert response.headers["X-RateLimit-Limit"] == "100"
    body = response.json()
    assert body["error"] == "Too many requests, please try again later"
    assert body["retryAfter"] == int(response.headers["Retry-After"])
    assert 0 < body["retryAfter"] <= 60


def test_denied_request_has_no_side_effects(make_client, store: Store) -> None:
    client = make_client(max_requests=1)
    payload = {"sender": "user1", "recipient": "user2", "content": "hello"}

    assert client.post("/messages", json=payload).status_code == status.HTTP_201_CREATED
    denied = client.post("/messages", json=payload)

    assert denied.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert store.counts()["messages"] == 1


def test_forwarded_for_ignored_by_default(make_client) -> None:
    client = make_client(max_requests=1)

    client.get("/health", headers={"X-Forwarded-For": "203.0.113.1"})
    response = client.get("/health", headers={"X-Forwarded-For": "203.0.113.2"})

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS


def test_forwarded_for_used_when_trusted(store: Store) -> None:
    settings = Settings(
        seed_users=sorted(store.users),
        rate_limit_max_requests=1,
        rate_limit_trust_forwarded_for=True,
    )
    client = TestClient(create_app(settings, store=store))

    first = client.get("/health", headers={"X-Forwarded-For": "203.0.113.1, 10.0.0.1"})
    second = client.get("/health", headers={"X-Forwarded-For": "203.0.113.2"})
    third = client.get("/health", headers={"X-Forwarded-For": "203.0.113.1"})

    assert first.status_code == status.HTTP_200_OK
    assert second.status_code == status.HTTP_200_OK
    assert third.status_code == status.HTTP_429_TOO_MANY_REQUESTS


def test_unknown_route_returns_json_404(client) -> None:
    response = client.get("/nowhere")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Route not found"}
    assert "X-RateLimit-Limit" in response.headers


def test_unsupported_method_returns_route_not_found(client) -> None:
    response = client.delete("/messages")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Route not found"}


def test_unexpected_error_returns_generic_500(make_client, caplog) -> None:
    client = make_client(raise_server_exceptions=False)

    async def explode() -> None:
        raise RuntimeError("secret internals")

    client.app.add_api_route("/explode", explode)

    with caplog.at_level(logging.ERROR, logger="pairchat"):
        response = client.get("/explode")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error"}
    assert "secret internals" not in response.text
    assert response.headers["X-RateLimit-Limit"] == "100"
    assert response.headers["X-RateLimit-Remaining"] == "99"
    assert "X-RateLimit-Reset" in response.headers
    assert any("Unhandled error" in record.getMessage() for record in caplog.records)


def test_unexpected_error_is_answered_inside_rate_limit_layer(make_client) -> None:
    client = make_client(max_requests=2)

    async def explode() -> None:
        raise ValueError("boom")

    client.app.add_api_route("/explode", explode)

    # The failure is answered before it reaches the server error layer
    failed = client.get("/explode")
    again = client.get("/explode")
    blocked = client.get("/explode")

    assert failed.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert failed.headers["X-RateLimit-Remaining"] == "1"
    assert again.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert again.headers["X-RateLimit-Remaining"] == "0"
    assert blocked.status_code == status.HTTP_429_TOO_MANY_REQUESTS


def test_internal_error_hides_message(make_client) -> None:
    client = make_client()

    async def fail() -> None:
        raise InternalError("store invariant broken")

    client.app.add_api_route("/fail", fail)

    response = client.get("/fail")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error"}
    assert "X-RateLimit-Limit" in response.headers
