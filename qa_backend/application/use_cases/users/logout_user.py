"""Use-case for signing a session out."""

from __future__ import annotations

from qa_backend.application.interfaces import Clock, UnitOfWorkFactory, utcnow
from qa_backend.domain.users.entities import User
from qa_backend.domain.users.exceptions import NoActiveSessionError
from qa_backend.shared.logging import logger


class LogoutUserUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory, clock: Clock = utcnow) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    def execute(self, token: str) -> User:
        if not token:
            raise NoActiveSessionError()

        with self._uow_factory() as uow:
            session = uow.sessions.find_by_token(token)
            if session is None:
                raise NoActiveSessionError()

            # Recorded even for expired or already signed-out sessions.
            uow.sessions.mark_logged_out(session.id, self._clock())
            user = uow.users.find_by_id(session.user_id)
            if user is None:
                raise NoActiveSessionError()

        logger.info(f"users.logout: ok user_id={user.id} session={session.uuid}")
        return user
