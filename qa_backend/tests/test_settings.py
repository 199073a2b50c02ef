from __future__ import annotations

from qa_backend.infrastructure.container import Container
from qa_backend.shared.config import AppConfig, SecurityConfig


def test_security_defaults() -> None:
    config = SecurityConfig()

    assert config.session_ttl_hours == 8
    assert config.require_active_session is True
    assert config.legacy_unauthorized_status is False


def test_security_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("AUTH_REQUIRE_ACTIVE_SESSION", "0")
    monkeypatch.setenv("LEGACY_UNAUTHORIZED_STATUS", "yes")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

    config = SecurityConfig()

    assert config.require_active_session is False
    assert config.legacy_unauthorized_status is True
    assert config.allowed_origins == ["https://a.example", "https://b.example"]


def test_database_url_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:///elsewhere.db")

    assert AppConfig().database.url == "sqlite:///elsewhere.db"


def test_password_hash_rounds_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PASSWORD_HASH_ROUNDS", "5")

    assert SecurityConfig().password_hash_rounds == 5


def test_container_cipher_uses_configured_rounds() -> None:
    config = AppConfig(security=SecurityConfig(password_hash_rounds=4))

    salt, _ = Container(config).password_cipher.hash_new("Secret1")

    assert salt.startswith("$2b$04$")
