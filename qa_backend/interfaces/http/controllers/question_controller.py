# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from qa_backend.application.use_cases.questions.create_question import CreateQuestionUseCase
from qa_backend.domain.users.exceptions import UnauthenticatedError
from qa_backend.infrastructure.audit import AuditAction, audit_log
from qa_backend.interfaces.http.dto.question import QuestionRequestDTO, QuestionResponseDTO
from qa_backend.interfaces.http.headers import bearer_token, get_client_ip
from qa_backend.shared.errors.validation import raise_validation_error


class QuestionController:
    def __init__(self, *, create_question_use_case: CreateQuestionUseCase) -> None:
        self._create_question_use_case = create_question_use_case

    def create(self) -> tuple[Response, int]:
        try:
            dto = QuestionRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            question = self._create_question_use_case.execute(bearer_token(), dto.content)
        except UnauthenticatedError:
            audit_log(
                AuditAction.AUTHORIZATION_FAILED,
                ip_address=get_client_ip(),
                details={"action": "question.create"},
                success=False,
            )
            raise

        audit_log(
            AuditAction.QUESTION_CREATED,
            user_id=question.user_id,
            ip_address=get_client_ip(),
            details={"question": question.uuid},
        )
        return jsonify(QuestionResponseDTO(id=question.uuid).model_dump()), 201

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("question", __name__, url_prefix="/question")
        bp.add_url_rule("/create", view_func=self.create, methods=["POST"])
        return bp
