# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import AuthSession, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def touch(self, user_id: int, seen_at: datetime) -> None: ...


class AuthSessionRepository(Protocol):
    def find_by_token(self, access_token: str) -> AuthSession | None: ...
    def add(self, session: AuthSession) -> AuthSession: ...
    def mark_logged_out(self, session_id: int, logout_at: datetime) -> None: ...


class PasswordCipher(Protocol):
    def hash_new(self, plaintext: str) -> tuple[str, str]: ...
    def hash(self, plaintext: str, salt: str) -> str: ...
    def verify(self, plaintext: str, salt: str, expected_hash: str) -> bool: ...


class TokenIssuer(Protocol):
    def issue(self, user_uuid: str, issued_at: datetime, expires_at: datetime) -> str: ...
