# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database unit of work implementation."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from qa_backend.application.interfaces import UnitOfWork
from qa_backend.infrastructure.repositories.questions import SqlAlchemyQuestionRepository
from qa_backend.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyAuthSessionRepository,
    SqlAlchemyUserRepository,
)
from qa_backend.shared.errors.base import StoreError
from qa_backend.shared.logging import logger


@dataclass(slots=True)
class SqlAlchemyUnitOfWork(AbstractContextManager, UnitOfWork):
    """SQLAlchemy-backed unit of work: one session, one transaction."""

    session_factory: Callable[[], Session]
    _session: Session | None = field(default=None, init=False)
    users: SqlAlchemyUserRepository = field(init=False)
    sessions: SqlAlchemyAuthSessionRepository = field(init=False)
    questions: SqlAlchemyQuestionRepository = field(init=False)

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self.session_factory()
        self.users = SqlAlchemyUserRepository(self._session)
        self.sessions = SqlAlchemyAuthSessionRepository(self._session)
        self.questions = SqlAlchemyQuestionRepository(self._session)
        logger.debug("uow: session opened")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        assert self._session is not None
        try:
            if exc is not None:
                logger.warning(f"uow: rollback due to {exc_type.__name__}")
                self._session.rollback()
                if isinstance(exc, SQLAlchemyError):
                    raise StoreError(message=str(exc.__class__.__name__)) from exc
                return
            try:
                self._session.commit()
            except IntegrityError as commit_error:
                self._session.rollback()
                logger.warning("uow: commit rejected by a store constraint")
                raise StoreError("store_conflict", message="constraint violated") from commit_error
            except SQLAlchemyError as commit_error:
                self._session.rollback()
                logger.exception("uow: commit failed")
                raise StoreError(message="commit failed") from commit_error
            logger.debug("uow: committed")
        finally:
            self._session.close()
            logger.debug("uow: session closed")
            self._session = None


def unit_of_work_factory(session_factory: Callable[[], Session]) -> Callable[[], SqlAlchemyUnitOfWork]:
    """Bind a session factory so use cases can open fresh units of work."""

    def _factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)

    return _factory
