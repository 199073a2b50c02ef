# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from datetime import timedelta

from qa_backend.application.interfaces import Clock, UnitOfWorkFactory, utcnow
from qa_backend.domain.users.entities import SESSION_TTL, AuthSession
from qa_backend.domain.users.exceptions import BadCredentialsError, UnknownUserError
from qa_backend.domain.users.repositories import PasswordCipher, TokenIssuer
from qa_backend.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        password_cipher: PasswordCipher,
        token_issuer: TokenIssuer,
        session_ttl: timedelta = SESSION_TTL,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._password_cipher = password_cipher
        self._token_issuer = token_issuer
        self._session_ttl = session_ttl
        self._clock = clock

    def execute(self, username: str, password: str) -> AuthSession:
        with self._uow_factory() as uow:
            user = uow.users.find_by_username(username)
            if user is None:
                logger.info("users.login: unknown username")
                raise UnknownUserError()

            if not self._password_cipher.verify(password, user.salt, user.password_hash):
                logger.info(f"users.login: password mismatch user_id={user.id}")
                raise BadCredentialsError()

            now = self._clock()
            expires_at = now + self._session_ttl
            session = AuthSession(
                id=0,
                uuid=str(uuid.uuid4()),
                user_id=user.id,
                user_uuid=user.uuid,
                access_token=self._token_issuer.issue(user.uuid, now, expires_at),
                login_at=now,
                expires_at=expires_at,
            )
            persisted = uow.sessions.add(session)
            uow.users.touch(user.id, now)

        logger.info(f"users.login: ok user_id={user.id} session={persisted.uuid}")
        return persisted
