"""Tests for root, health and system endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from pairchat.core.settings import Settings
from pairchat.db.store import Store
from pairchat.main import create_app


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root_describes_service(client, test_settings: Settings) -> None:
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == test_settings.app_name
    assert response.json()["docs"] == "/docs"


def test_public_config(client) -> None:
    data = client.get("/system/config").json()

    assert data["rate_limit"]["window_ms"] == 60_000
    assert data["rate_limit"]["window_seconds"] == 60
    assert data["rate_limit"]["max_requests"] == 100
    assert data["users"] == ["user1", "user2", "user3", "user4"]


def test_stats_count_activity(client, send) -> None:
    send("user1", "user2", "hello")
    send("user3", "user1", "hey")

    data = client.get("/system/stats").json()

    assert data["users"] == 4
    assert data["messages"] == 2
    assert data["chats"] == 2
    assert data["rate_limited_clients"] == 1


def test_reset_clears_messages_chats_and_windows(client, send, store: Store) -> None:
    send("user1", "user2", "hello")

    response = client.post("/system/reset")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "reset"}
    assert store.counts() == {"users": 4, "messages": 0, "chats": 0}
    # Only the stats request below has been counted since the reset
    assert client.get("/system/stats").json()["rate_limited_clients"] == 1
    assert client.get("/chats/user/user1").json() == []


def test_reset_hidden_when_disabled(store: Store) -> None:
    settings = Settings(seed_users=sorted(store.users), admin_reset_enabled=False)
    client = TestClient(create_app(settings, store=store))

    response = client.post("/system/reset")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Route not found"}
