# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from datetime import timedelta

from flask import Flask

from authcore.infrastructure.container import Container
from authcore.infrastructure.db import init_db
from authcore.shared.logging import logger, setup_logging
from authcore.shared.middleware.error_handler import configure_error_handling
from authcore.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    if container is None:
        container = Container()
        init_db()
    config = container.config
    setup_logging(debug_mode=config.debug_logging)

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    app.config.update(
        SECRET_KEY=config.secret_key,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE=config.security.cookie_samesite,
        SESSION_COOKIE_SECURE=config.security.cookie_secure,
        PERMANENT_SESSION_LIFETIME=timedelta(seconds=config.security.session_lifetime),
    )
    app.extensions["authcore.container"] = container
    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")
        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="127.0.0.1", port=5000, debug=True)
