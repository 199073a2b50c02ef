"""Bearer token issuance."""

from __future__ import annotations

import secrets
from datetime import datetime

from qa_backend.domain.users.repositories import TokenIssuer
from qa_backend.shared.logging import logger


class OpaqueTokenIssuer(TokenIssuer):
    """Random URL-safe tokens; validity is checked by looking the token up."""

    def __init__(self, *, token_bytes: int = 48) -> None:
        self._token_bytes = token_bytes

    def issue(self, user_uuid: str, issued_at: datetime, expires_at: datetime) -> str:
        if expires_at <= issued_at:
            raise ValueError("token must expire after it is issued")
        token = secrets.token_urlsafe(self._token_bytes)
        logger.debug(f"token.issue: user={user_uuid} exp={expires_at.isoformat()}")
        return token
