# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response
from flask_cors import CORS

from inkwell.infrastructure.container import Container
from inkwell.infrastructure.db import init_db
from inkwell.shared.config import load_config
from inkwell.shared.logging import logger, setup_logging
from inkwell.shared.middleware.error_handler import configure_error_handling
from inkwell.shared.middleware.request_logger import configure_request_logging

# Room for the text fields and multipart framing around a full-size image.
_FORM_OVERHEAD_BYTES = 1024 * 1024


def create_app(container: Container | None = None) -> Flask:
    config = container.config if container is not None else load_config()
    container = container or Container(config)

    init_db()
    setup_logging(debug_mode=config.debug_logging)

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    app.config.update(
        SECRET_KEY=config.secret_key,
        MAX_CONTENT_LENGTH=config.media.max_image_bytes + _FORM_OVERHEAD_BYTES,
    )
    app.json.sort_keys = False

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.posts_controller.as_blueprint())
    app.extensions["inkwell.container"] = container

    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Permitted-Cross-Domain-Policies", "none")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(f"Flask app initialized (env={config.app_env}, media={config.media.backend})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
