# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy.orm import Session

from qa_backend.domain.questions.entities import Question as DomainQuestion
from qa_backend.domain.questions.repositories import QuestionRepository
from qa_backend.infrastructure.db import as_utc
from qa_backend.infrastructure.db.models import Question


class SqlAlchemyQuestionRepository(QuestionRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, question: DomainQuestion) -> DomainQuestion:
        row = Question(
            uuid=question.uuid,
            content=question.content,
            user_id=question.user_id,
            created_at=question.created_at,
        )
        self._session.add(row)
        self._session.flush()
        return DomainQuestion(
            id=row.id,
            uuid=row.uuid,
            content=row.content,
            user_id=row.user_id,
            created_at=as_utc(row.created_at),
        )
