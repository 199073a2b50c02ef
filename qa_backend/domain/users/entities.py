# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""User and session records owned by the authentication core."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta

from qa_backend.domain.exceptions import InvariantViolation

SESSION_TTL = timedelta(hours=8)

DEFAULT_ROLE = "nonadmin"
ACTIVE_STATUS = "active"


@dataclass(slots=True, frozen=True)
class UserProfile:
    first_name: str | None = None
    last_name: str | None = None
    about_me: str | None = None
    country: str | None = None
    contact_number: str | None = None


@dataclass(slots=True, frozen=True)
class User:
    id: int
    uuid: str
    username: str
    email: str
    salt: str
    password_hash: str
    created_at: datetime
    role: str = DEFAULT_ROLE
    status: str = ACTIVE_STATUS
    profile: UserProfile = field(default_factory=UserProfile)
    last_seen_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class AuthSession:
    """One successful sign-in, bounded by ``expires_at`` and closed by sign-out.

    Expiry and sign-out are soft states on the same record; nothing deletes it.
    """

    id: int
    uuid: str
    user_id: int
    user_uuid: str
    access_token: str
    login_at: datetime
    expires_at: datetime
    logout_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.access_token:
            raise InvariantViolation("access token must not be empty", field="access_token")
        if self.expires_at <= self.login_at:
            raise InvariantViolation("session must expire after login", field="expires_at")

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def is_logged_out(self) -> bool:
        return self.logout_at is not None

    def is_active(self, now: datetime) -> bool:
        return not self.is_logged_out() and not self.is_expired(now)

    def logged_out(self, at: datetime) -> AuthSession:
        return replace(self, logout_at=at)
