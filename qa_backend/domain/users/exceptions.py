# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import Enum
from http import HTTPStatus

from qa_backend.shared.errors.base import DomainError


class ErrorKind(str, Enum):
    DUPLICATE_USERNAME = "duplicate_username"
    DUPLICATE_EMAIL = "duplicate_email"
    UNKNOWN_USER = "unknown_user"
    BAD_CREDENTIALS = "bad_credentials"
    UNAUTHENTICATED = "unauthenticated"
    NO_ACTIVE_SESSION = "no_active_session"


class AuthError(DomainError):
    """Expected, caller-recoverable failure of the authentication core.

    ``code`` is the stable external identifier; ``kind`` is the tag callers
    branch on. Sign-up and sign-out share ``SGR-001``, so the code alone does
    not identify the condition.
    """

    kind: ErrorKind


class DuplicateUsernameError(AuthError):
    kind = ErrorKind.DUPLICATE_USERNAME
    code = "SGR-001"
    status = HTTPStatus.CONFLICT
    message = "Try any other Username, this Username has already been taken"


class DuplicateEmailError(AuthError):
    kind = ErrorKind.DUPLICATE_EMAIL
    code = "SGR-002"
    status = HTTPStatus.CONFLICT
    message = "This user has already been registered, try with any other emailId"


class UnknownUserError(AuthError):
    kind = ErrorKind.UNKNOWN_USER
    code = "ATH-001"
    status = HTTPStatus.NOT_FOUND
    message = "This username does not exist"


class BadCredentialsError(AuthError):
    kind = ErrorKind.BAD_CREDENTIALS
    code = "ATH-002"
    status = HTTPStatus.UNAUTHORIZED
    message = "Password failed"


class UnauthenticatedError(AuthError):
    kind = ErrorKind.UNAUTHENTICATED
    code = "ATHR-001"
    status = HTTPStatus.FORBIDDEN
    message = "User has not signed in"


class NoActiveSessionError(AuthError):
    kind = ErrorKind.NO_ACTIVE_SESSION
    code = "SGR-001"
    status = HTTPStatus.UNAUTHORIZED
    message = "User is not Signed in"
