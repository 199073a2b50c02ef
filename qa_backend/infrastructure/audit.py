# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from qa_backend.shared.logging import logger, sanitize_message


class AuditAction(str, Enum):
    SIGNUP = "signup"
    SIGNUP_REJECTED = "signup_rejected"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    LOGOUT_REJECTED = "logout_rejected"
    AUTHORIZATION_FAILED = "authorization_failed"
    QUESTION_CREATED = "question_created"


# Credential material never reaches the audit trail, not even masked.
_DROPPED_KEYS = frozenset({"password", "access_token", "token", "salt", "password_hash"})


@dataclass(frozen=True, slots=True)
class AuthEvent:
    """One line of the auth audit trail."""

    action: AuditAction
    user_id: int | None = None
    ip_address: str | None = None
    success: bool = True
    details: Mapping[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        parts = [
            f"AUDIT {self.action.value}",
            f"user_id={self.user_id}",
            f"ip={self.ip_address}",
            f"success={self.success}",
        ]
        for key in sorted(self.details):
            if key.lower() in _DROPPED_KEYS:
                continue
            parts.append(f"{key}={self.details[key]}")
        return sanitize_message(" | ".join(parts))


def audit_log(
    action: AuditAction,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: Mapping[str, Any] | None = None,
    success: bool = True,
) -> AuthEvent:
    event = AuthEvent(
        action=action,
        user_id=user_id,
        ip_address=ip_address,
        success=success,
        details=dict(details or {}),
    )
    bound = logger.bind(audit_action=action.value)
    if success:
        bound.info(event.render())
    else:
        bound.warning(event.render())
    return event


__all__ = ["AuditAction", "AuthEvent", "audit_log"]
