# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from qa_backend.infrastructure.container import Container
from qa_backend.infrastructure.db import init_db
from qa_backend.shared.logging import logger, setup_logging
from qa_backend.shared.middleware.error_handler import configure_error_handling
from qa_backend.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    container = container or Container()
    config = container.config

    setup_logging(debug_mode=config.debug_logging, to_file=config.log_to_file)
    init_db(container.engine)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    configure_error_handling(app, config)
    configure_request_logging(app, debug_mode=config.debug_logging)

    CORS(
        app,
        resources={r"/*": {"origins": config.security.allowed_origins}},
        expose_headers=["access-token"],
    )
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.question_controller.as_blueprint())
    app.extensions["qa_backend.container"] = container

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )
        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=8080, debug=True)
