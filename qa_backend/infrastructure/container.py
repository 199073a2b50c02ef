# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from qa_backend.application.services.password_hashing import BcryptPasswordCipher
from qa_backend.application.services.token_issuer import OpaqueTokenIssuer
from qa_backend.application.use_cases.questions.create_question import CreateQuestionUseCase
from qa_backend.application.use_cases.users.authorize import AuthorizationGuard
from qa_backend.application.use_cases.users.login_user import LoginUserUseCase
from qa_backend.application.use_cases.users.logout_user import LogoutUserUseCase
from qa_backend.application.use_cases.users.register_user import RegisterUserUseCase
from qa_backend.infrastructure.db import build_engine, build_session_factory
from qa_backend.infrastructure.unit_of_work import SqlAlchemyUnitOfWork, unit_of_work_factory
from qa_backend.interfaces.http.controllers.auth_controller import AuthController
from qa_backend.interfaces.http.controllers.question_controller import QuestionController
from qa_backend.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None, *, engine: Engine | None = None) -> None:
        self.config = config or load_config()
        self._engine = engine

    @cached_property
    def engine(self) -> Engine:
        return self._engine or build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def uow_factory(self) -> Callable[[], SqlAlchemyUnitOfWork]:
        return unit_of_work_factory(self.session_factory)

    @cached_property
    def password_cipher(self) -> BcryptPasswordCipher:
        return BcryptPasswordCipher(rounds=self.config.security.password_hash_rounds)

    @cached_property
    def token_issuer(self) -> OpaqueTokenIssuer:
        return OpaqueTokenIssuer(token_bytes=self.config.security.token_bytes)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            uow_factory=self.uow_factory,
            password_cipher=self.password_cipher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            uow_factory=self.uow_factory,
            password_cipher=self.password_cipher,
            token_issuer=self.token_issuer,
            session_ttl=timedelta(hours=self.config.security.session_ttl_hours),
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(uow_factory=self.uow_factory)

    @cached_property
    def authorization_guard(self) -> AuthorizationGuard:
        return AuthorizationGuard(
            uow_factory=self.uow_factory,
            require_active=self.config.security.require_active_session,
        )

    @cached_property
    def create_question_use_case(self) -> CreateQuestionUseCase:
        return CreateQuestionUseCase(uow_factory=self.uow_factory, guard=self.authorization_guard)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
        )

    @cached_property
    def question_controller(self) -> QuestionController:
        return QuestionController(create_question_use_case=self.create_question_use_case)
