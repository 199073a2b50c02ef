# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_ENV = {
    "env_file": ".env",
    "env_file_encoding": "utf-8",
    "extra": "ignore",
    "validate_by_name": True,
}


def _parse_flag(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///qa_backend.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")
    echo: bool = Field(False, alias="DATABASE_ECHO")

    model_config = SettingsConfigDict(**_ENV)


class SecurityConfig(BaseSettings):
    # Sessions
    session_ttl_hours: int = Field(8, ge=1, alias="SESSION_TTL_HOURS")
    token_bytes: int = Field(48, ge=16, alias="TOKEN_BYTES")
    require_active_session: bool = Field(True, alias="AUTH_REQUIRE_ACTIVE_SESSION")

    # Password hashing (bcrypt)
    password_hash_rounds: int = Field(12, ge=4, le=31, alias="PASSWORD_HASH_ROUNDS")

    # Map every auth failure to 401 like the first API revision did
    legacy_unauthorized_status: bool = Field(False, alias="LEGACY_UNAUTHORIZED_STATUS")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(**_ENV)

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator(
        "require_active_session", "legacy_unauthorized_status", "enable_hsts", mode="before"
    )
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_to_file: bool = Field(True, alias="LOG_TO_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(validate_assignment=True, **_ENV)

    @field_validator("debug_logging", "log_to_file", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_flag(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("dev", "development", "test", ""):
            print(
                "\nCRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if self.security.password_hash_rounds < 12:
            warnings.append("PASSWORD_HASH_ROUNDS is below 12")
        if not self.security.require_active_session:
            warnings.append("Expired and signed-out tokens are accepted (AUTH_REQUIRE_ACTIVE_SESSION=0)")
        if "*" in self.security.allowed_origins:
            warnings.append("CORS allows wildcard (*) origins")

        if warnings:
            print("\nPRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "DatabaseConfig", "SecurityConfig", "load_config"]
