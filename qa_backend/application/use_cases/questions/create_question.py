# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid

from qa_backend.application.interfaces import Clock, UnitOfWorkFactory, utcnow
from qa_backend.application.use_cases.users.authorize import AuthorizationGuard
from qa_backend.domain.questions.entities import Question
from qa_backend.shared.logging import logger


class CreateQuestionUseCase:
    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        guard: AuthorizationGuard,
        clock: Clock = utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._guard = guard
        self._clock = clock

    def execute(self, token: str, content: str) -> Question:
        with self._uow_factory() as uow:
            author = self._guard.check(uow, token)
            question = uow.questions.add(
                Question(
                    id=0,
                    uuid=str(uuid.uuid4()),
                    content=content,
                    user_id=author.id,
                    created_at=self._clock(),
                )
            )

        logger.info(f"questions.create: ok question={question.uuid} user_id={author.id}")
        return question
