# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

from qa_backend.domain.questions.repositories import QuestionRepository
from qa_backend.domain.users.repositories import AuthSessionRepository, UserRepository


class UnitOfWork(Protocol):
    """One atomic batch of credential-store reads and writes.

    Leaving the context commits; leaving it with an exception rolls back.
    """

    users: UserRepository
    sessions: AuthSessionRepository
    questions: QuestionRepository

    def __enter__(self) -> UnitOfWork: ...

    def __exit__(self, exc_type, exc, tb) -> None: ...


UnitOfWorkFactory = Callable[[], UnitOfWork]
Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)
