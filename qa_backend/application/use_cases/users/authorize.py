# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token check performed before every protected action."""

from __future__ import annotations

from qa_backend.application.interfaces import Clock, UnitOfWork, UnitOfWorkFactory, utcnow
from qa_backend.domain.users.entities import User
from qa_backend.domain.users.exceptions import UnauthenticatedError
from qa_backend.shared.logging import logger


class AuthorizationGuard:
    """Resolve a presented token to the user it was issued to.

    With ``require_active`` the session must also be unexpired and not signed
    out; without it any session ever issued for the token is accepted, which
    is how the first API revision behaved.
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        require_active: bool = True,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._require_active = require_active
        self._clock = clock

    def authorize(self, token: str) -> User:
        with self._uow_factory() as uow:
            return self.check(uow, token)

    def check(self, uow: UnitOfWork, token: str) -> User:
        """Run the check inside a unit of work the caller already opened."""
        if not token:
            raise UnauthenticatedError()

        session = uow.sessions.find_by_token(token)
        if session is None:
            logger.info("auth.guard: token not found")
            raise UnauthenticatedError()

        if self._require_active and not session.is_active(self._clock()):
            reason = "signed out" if session.is_logged_out() else "expired"
            logger.info(f"auth.guard: session {session.uuid} {reason}")
            raise UnauthenticatedError()

        user = uow.users.find_by_id(session.user_id)
        if user is None:
            raise UnauthenticatedError()
        return user
