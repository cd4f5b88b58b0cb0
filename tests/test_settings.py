"""Tests for environment-driven settings."""

import pytest

from pairchat.core.settings import Settings


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("alice,bob", ["alice", "bob"]),
        (" alice , bob ,", ["alice", "bob"]),
        ('["alice", "bob"]', ["alice", "bob"]),
    ],
)
def test_seed_users_from_environment(monkeypatch, raw: str, expected: list[str]) -> None:
    monkeypatch.setenv("SEED_USERS", raw)

    assert Settings().seed_users == expected


def test_cors_origins_from_comma_separated_environment(monkeypatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example,https://b.example")

    assert Settings().cors_origins == ["https://a.example", "https://b.example"]


def test_list_settings_accept_python_values() -> None:
    settings = Settings(seed_users=["x", "y"])

    assert settings.seed_users == ["x", "y"]
    assert settings.cors_origins == ["*"]
