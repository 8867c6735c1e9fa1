# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import importlib
from typing import Any, Protocol, cast

from flask import Flask

from phoneauth.infrastructure.container import Container, container
from phoneauth.infrastructure.db import init_db
from phoneauth.shared.config import load_config
from phoneauth.shared.logging import logger, setup_logging
from phoneauth.shared.middleware.error_handler import configure_error_handling
from phoneauth.shared.middleware.request_logger import configure_request_logging


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)


_config = load_config()


def create_app(services: Container | None = None) -> Flask:
    services = services or container

    init_db()
    setup_logging(_config.logging, debug=_config.debug_logging)
    for warning in _config.security_warnings():
        logger.warning(f"config: {warning}")

    app = Flask(__name__)
    app.config.update(SECRET_KEY=_config.secret_key)
    configure_error_handling(app)
    configure_request_logging(app)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": _config.security.allowed_origins}}
    }
    CORS(app, **cors_kwargs)
    app.register_blueprint(services.misc_controller.as_blueprint())
    app.register_blueprint(services.auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if _config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(
        f"Flask app initialized env={_config.app_env} "
        f"token_ttl={_config.tokens.ttl_minutes}m"
    )
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
