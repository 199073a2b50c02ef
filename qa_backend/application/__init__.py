# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import Clock, UnitOfWork, UnitOfWorkFactory, utcnow
from .use_cases.questions.create_question import CreateQuestionUseCase
from .use_cases.users.authorize import AuthorizationGuard
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "AuthorizationGuard",
    "Clock",
    "CreateQuestionUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "utcnow",
]
