# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Credential extraction from request headers."""

from __future__ import annotations

import base64
import binascii

from flask import request
from pydantic import ValidationError

from qa_backend.interfaces.http.dto.auth import SigninCredentialsDTO
from qa_backend.shared.errors.validation import raise_validation_error
from qa_backend.shared.middleware.request_logger import get_client_ip

__all__ = ["basic_credentials", "bearer_token", "get_client_ip"]


def bearer_token() -> str:
    """Return the access token from ``authorization``, with or without a ``Bearer`` prefix."""
    header = request.headers.get("Authorization", "").strip()
    if header[:7].lower() == "bearer ":
        return header[7:].strip()
    return header


def basic_credentials() -> SigninCredentialsDTO:
    """Decode ``Basic base64(username:password)`` into validated credentials."""
    header = request.headers.get("Authorization", "").strip()
    encoded = header[6:].strip() if header[:6].lower() == "basic " else header
    username, password = "", ""
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        decoded = ""
    if ":" in decoded:
        username, password = decoded.split(":", 1)

    try:
        return SigninCredentialsDTO(username=username, password=password)
    except ValidationError as exc:
        raise_validation_error(exc)
