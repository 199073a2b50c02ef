# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from qa_backend.shared.config import AppConfig
from qa_backend.shared.errors import register_error_handler


def configure_error_handling(app: Flask, config: AppConfig | None = None) -> None:
    legacy = config.security.legacy_unauthorized_status if config is not None else None
    register_error_handler(app, legacy_unauthorized=legacy)
