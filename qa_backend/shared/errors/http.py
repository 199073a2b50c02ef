# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from qa_backend.shared.config import load_config
from qa_backend.shared.logging import logger

from .base import AppError, DomainError


def resolve_status(error: AppError, *, legacy_unauthorized: bool = False) -> HTTPStatus:
    # Older clients expect every sign-up/sign-in/authorization failure as 401.
    if legacy_unauthorized and isinstance(error, DomainError) and getattr(error, "kind", None):
        return HTTPStatus.UNAUTHORIZED
    return error.status


def handle_app_error(
    error: AppError, *, legacy_unauthorized: bool = False
) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    return response, resolve_status(error, legacy_unauthorized=legacy_unauthorized)


def register_error_handler(
    app: Flask,
    *,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
    legacy_unauthorized: bool | None = None,
) -> None:
    config = load_config()
    debug_mode = config.debug_logging
    if legacy_unauthorized is None:
        legacy_unauthorized = config.security.legacy_unauthorized_status

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.warning(f"Handled application error {exc.code} on {request.method} {request.path}")
        return handle_app_error(exc, legacy_unauthorized=legacy_unauthorized)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        user_id = getattr(g, "user_id", None)
        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"user={user_id} body_size={len(request.data)}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")

        response = jsonify({"error": "internal_error"})
        return response, default_status
