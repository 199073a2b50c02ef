# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid

from qa_backend.application.interfaces import Clock, UnitOfWorkFactory, utcnow
from qa_backend.domain.users.entities import ACTIVE_STATUS, User, UserProfile
from qa_backend.domain.users.exceptions import DuplicateEmailError, DuplicateUsernameError
from qa_backend.domain.users.repositories import PasswordCipher
from qa_backend.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        password_cipher: PasswordCipher,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._password_cipher = password_cipher
        self._clock = clock

    def execute(
        self,
        username: str,
        email: str,
        password: str,
        *,
        profile: UserProfile | None = None,
    ) -> User:
        with self._uow_factory() as uow:
            # Username is checked first: it decides the error when both collide.
            if uow.users.find_by_username(username) is not None:
                raise DuplicateUsernameError()
            if uow.users.find_by_email(email) is not None:
                raise DuplicateEmailError()

            salt, password_hash = self._password_cipher.hash_new(password)
            user = User(
                id=0,
                uuid=str(uuid.uuid4()),
                username=username,
                email=email,
                salt=salt,
                password_hash=password_hash,
                created_at=self._clock(),
                status=ACTIVE_STATUS,
                profile=profile or UserProfile(),
            )
            persisted = uow.users.add(user)

        logger.info(f"users.register: ok user_id={persisted.id}")
        return persisted
