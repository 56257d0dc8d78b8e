# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from bareddit.container import Container
from bareddit.interfaces.http.sessions import configure_sessions
from bareddit.shared.config import load_config
from bareddit.shared.logging import logger, setup_logging
from bareddit.shared.middleware.error_handler import configure_error_handling
from bareddit.shared.middleware.request_logger import configure_request_logging
from bareddit.shared.middleware.security_headers import configure_security_headers


def create_app(container: Container | None = None) -> Flask:
    container = container or Container(load_config())
    config = container.config

    setup_logging(level=config.log_level, log_file=config.log_file)
    container.database.init_db()

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions["bareddit.container"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_sessions(app, container.session_store, container.session_cookie)
    configure_security_headers(app, enable_hsts=config.security.enable_hsts)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    logger.info(f"Flask app initialized env={config.app_env}")
    return app
