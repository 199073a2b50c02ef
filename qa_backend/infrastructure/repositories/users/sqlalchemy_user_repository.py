# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from qa_backend.domain.users.entities import AuthSession as DomainAuthSession
from qa_backend.domain.users.entities import User as DomainUser
from qa_backend.domain.users.entities import UserProfile
from qa_backend.domain.users.exceptions import DuplicateEmailError, DuplicateUsernameError
from qa_backend.domain.users.repositories import AuthSessionRepository, UserRepository
from qa_backend.infrastructure.db import as_utc
from qa_backend.infrastructure.db.models import User, UserAuth
from qa_backend.shared.errors.base import StoreError


_DUPLICATE_ERRORS: dict[str, type[DuplicateUsernameError] | type[DuplicateEmailError]] = {
    "uq_users_username": DuplicateUsernameError,
    "users.username": DuplicateUsernameError,
    "uq_users_email": DuplicateEmailError,
    "users.email": DuplicateEmailError,
}

# PostgreSQL names the constraint, SQLite names the column, MySQL names the key.
_CONSTRAINT_PATTERNS = (
    re.compile(r'unique constraint "([^"]+)"', re.IGNORECASE),
    re.compile(r"UNIQUE constraint failed: ([\w.]+)"),
    re.compile(r"for key '([^']+)'"),
)


def _violated_constraint(exc: IntegrityError) -> str | None:
    diag = getattr(exc.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return name
    message = str(exc.orig)
    for pattern in _CONSTRAINT_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1)
    return None


def _duplicate_error(exc: IntegrityError) -> DuplicateUsernameError | DuplicateEmailError | None:
    name = _violated_constraint(exc)
    if name is None:
        return None
    error_cls = _DUPLICATE_ERRORS.get(name) or _DUPLICATE_ERRORS.get(name.rsplit(".", 1)[-1])
    return error_cls() if error_cls else None


def _to_domain_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        uuid=row.uuid,
        username=row.username,
        email=row.email,
        salt=row.salt,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
        role=row.role,
        status=row.status,
        profile=UserProfile(
            first_name=row.first_name,
            last_name=row.last_name,
            about_me=row.about_me,
            country=row.country,
            contact_number=row.contact_number,
        ),
        last_seen_at=as_utc(row.last_seen_at),
    )


def _to_domain_session(row: UserAuth) -> DomainAuthSession:
    return DomainAuthSession(
        id=row.id,
        uuid=row.uuid,
        user_id=row.user_id,
        user_uuid=row.user.uuid,
        access_token=row.access_token,
        login_at=as_utc(row.login_at),
        expires_at=as_utc(row.expires_at),
        logout_at=as_utc(row.logout_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_username(self, username: str) -> DomainUser | None:
        row = self._session.scalars(select(User).where(User.username == username)).first()
        return _to_domain_user(row) if row else None

    def find_by_email(self, email: str) -> DomainUser | None:
        row = self._session.scalars(select(User).where(User.email == email)).first()
        return _to_domain_user(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        row = self._session.get(User, user_id)
        return _to_domain_user(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        row = User(
            uuid=user.uuid,
            username=user.username,
            email=user.email,
            salt=user.salt,
            password_hash=user.password_hash,
            first_name=user.profile.first_name,
            last_name=user.profile.last_name,
            about_me=user.profile.about_me,
            country=user.profile.country,
            contact_number=user.profile.contact_number,
            role=user.role,
            status=user.status,
            created_at=user.created_at,
        )
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as exc:
            # A concurrent sign-up won the race past the pre-checks.
            duplicate = _duplicate_error(exc)
            if duplicate is not None:
                raise duplicate from exc
            raise StoreError("store_conflict", message="user constraint violated") from exc
        return _to_domain_user(row)

    def touch(self, user_id: int, seen_at: datetime) -> None:
        self._session.execute(update(User).where(User.id == user_id).values(last_seen_at=seen_at))


class SqlAlchemyAuthSessionRepository(AuthSessionRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_token(self, access_token: str) -> DomainAuthSession | None:
        row = self._session.scalars(
            select(UserAuth)
            .options(joinedload(UserAuth.user))
            .where(UserAuth.access_token == access_token)
        ).first()
        return _to_domain_session(row) if row else None

    def add(self, session: DomainAuthSession) -> DomainAuthSession:
        row = UserAuth(
            uuid=session.uuid,
            user_id=session.user_id,
            access_token=session.access_token,
            login_at=session.login_at,
            expires_at=session.expires_at,
            logout_at=session.logout_at,
        )
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return _to_domain_session(row)

    def mark_logged_out(self, session_id: int, logout_at: datetime) -> None:
        self._session.execute(
            update(UserAuth).where(UserAuth.id == session_id).values(logout_at=logout_at)
        )
