# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain layer for the Q&A backend."""

from .exceptions import InvariantViolation
from .questions.entities import Question
from .users.entities import SESSION_TTL, AuthSession, User, UserProfile
from .users.exceptions import (
    AuthError,
    BadCredentialsError,
    DuplicateEmailError,
    DuplicateUsernameError,
    ErrorKind,
    NoActiveSessionError,
    UnauthenticatedError,
    UnknownUserError,
)

__all__ = [
    "SESSION_TTL",
    "AuthError",
    "AuthSession",
    "BadCredentialsError",
    "DuplicateEmailError",
    "DuplicateUsernameError",
    "ErrorKind",
    "InvariantViolation",
    "NoActiveSessionError",
    "Question",
    "UnauthenticatedError",
    "UnknownUserError",
    "User",
    "UserProfile",
]
