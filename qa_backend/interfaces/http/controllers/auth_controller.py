# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from qa_backend.application.use_cases.users.login_user import LoginUserUseCase
from qa_backend.application.use_cases.users.logout_user import LogoutUserUseCase
from qa_backend.application.use_cases.users.register_user import RegisterUserUseCase
from qa_backend.domain.users.entities import UserProfile
from qa_backend.domain.users.exceptions import AuthError
from qa_backend.infrastructure.audit import AuditAction, audit_log
from qa_backend.interfaces.http.dto.auth import (
    SigninResponseDTO,
    SignoutResponseDTO,
    SignupRequestDTO,
    SignupResponseDTO,
)
from qa_backend.interfaces.http.headers import basic_credentials, bearer_token, get_client_ip
from qa_backend.shared.errors.validation import raise_validation_error
from qa_backend.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case

    def signup(self) -> tuple[Response, int]:
        try:
            dto = SignupRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        profile = UserProfile(
            first_name=dto.first_name,
            last_name=dto.last_name,
            about_me=dto.about_me,
            country=dto.country,
            contact_number=dto.contact_number,
        )
        try:
            user = self._register_use_case.execute(
                dto.username, dto.email, dto.password, profile=profile
            )
        except AuthError as exc:
            audit_log(
                AuditAction.SIGNUP_REJECTED,
                ip_address=get_client_ip(),
                details={"username": dto.username, "code": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.SIGNUP,
            user_id=user.id,
            ip_address=get_client_ip(),
            details={"username": dto.username},
        )
        logger.info(f"auth.signup: ok user_id={user.id}")
        return jsonify(SignupResponseDTO(id=user.uuid).model_dump()), 201

    def signin(self) -> Response:
        credentials = basic_credentials()
        ip_address = get_client_ip()

        try:
            session = self._login_use_case.execute(credentials.username, credentials.password)
        except AuthError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": credentials.username, "code": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=session.user_id,
            ip_address=ip_address,
            details={"username": credentials.username},
        )
        g.user_id = session.user_id

        response = jsonify(SigninResponseDTO(id=session.user_uuid).model_dump())
        response.headers["access-token"] = session.access_token
        response.headers["Cache-Control"] = "no-store"
        logger.info(f"auth.signin: ok user_id={session.user_id}")
        return response

    def signout(self) -> Response:
        try:
            user = self._logout_use_case.execute(bearer_token())
        except AuthError as exc:
            audit_log(
                AuditAction.LOGOUT_REJECTED,
                ip_address=get_client_ip(),
                details={"code": exc.code},
                success=False,
            )
            raise

        audit_log(AuditAction.LOGOUT, user_id=user.id, ip_address=get_client_ip())
        logger.info(f"auth.signout: ok user_id={user.id}")
        return jsonify(SignoutResponseDTO(id=user.uuid).model_dump())

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/user")
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/signin", view_func=self.signin, methods=["POST"])
        bp.add_url_rule("/signout", view_func=self.signout, methods=["POST"])
        return bp
