# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from taxidesk.container import Container
from taxidesk.infrastructure.store_setup import setup_store
from taxidesk.shared.config import AppConfig, load_config
from taxidesk.shared.logging import logger, setup_logging
from taxidesk.shared.middleware.error_handler import configure_error_handling
from taxidesk.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging(
        "DEBUG" if config.debug_logging else config.log_level,
        log_file=config.log_file,
    )

    container = Container(config)
    setup_store(config.store, container.store, container.password_hasher)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.json.sort_keys = False  # type: ignore[attr-defined]
    app.extensions["taxidesk"] = container

    if config.security.trusted_proxy_count:
        hops = config.security.trusted_proxy_count
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops)  # type: ignore[method-assign]

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    CORS(
        app,
        resources={rf"{config.api_prefix}/*": {"origins": config.security.allowed_origins}},
        expose_headers=["Content-Disposition", "X-Request-ID"],
    )

    prefix = config.api_prefix
    app.register_blueprint(container.misc_controller.as_blueprint(prefix))
    app.register_blueprint(container.auth_controller.as_blueprint(prefix))
    app.register_blueprint(container.reservations_controller.as_blueprint(prefix))

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info(f"Flask app initialized (store={config.store.path}, prefix={prefix or '/'})")
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    app.run(host=config.host, port=config.port, threaded=True)


if __name__ == "__main__":
    main()
